# content/urls.py

from django.urls import path

from . import views

urlpatterns = [
    path('init/', views.init_first_item_view, name='init_first_item'),
    path('api/session/', views.session_view, name='session'),
    path('auth/logout/', views.logout_view, name='auth_logout'),
]
