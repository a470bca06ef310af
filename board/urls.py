from django.urls import path, include
from rest_framework.routers import DefaultRouter
from board.adapters.viewset.board_viewset import BoardViewSet

router = DefaultRouter()
router.register(r'boards', BoardViewSet, basename='board')

urlpatterns = [
    path('', include(router.urls)),
]
