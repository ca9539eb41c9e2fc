from django.urls import path

from . import views

urlpatterns = [
    path('comments/', views.add_comment, name='add_comment'),
    path('comments/<str:comment_id>/', views.comment_detail, name='comment_detail'),
    path('comments/<str:comment_id>/edit/', views.update_comment, name='update_comment'),
    path('comments/<str:comment_id>/delete/', views.delete_comment, name='delete_comment'),
    path('movies/<str:movie_id>/comments/', views.movie_comments, name='movie_comments'),
    path('critics/', views.critics, name='critics'),
]
