from django.urls import path
from games.views import (
    home,
    play,
    game_view,
    answer,
    reveal,
    flip,
    next_card,
    prev_card,
    mistakes,
    api_game,
)

urlpatterns = [
    path('', home, name='home'),
    # Allow subfolders inside the data dir via <path:fname>
    path('play/<str:mode>/<path:fname>/', play, name='play'),
    path('game/<str:game_id>/', game_view, name='game'),
    path('game/<str:game_id>/answer/', answer, name='answer'),
    path('game/<str:game_id>/reveal/', reveal, name='reveal'),
    path('game/<str:game_id>/flip/', flip, name='flip'),
    path('game/<str:game_id>/next/', next_card, name='next_card'),
    path('game/<str:game_id>/prev/', prev_card, name='prev_card'),
    path('mistakes/<str:mode>/', mistakes, name='mistakes'),
    path('api/game/', api_game, name='api_game'),
]
