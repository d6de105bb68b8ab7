"""
Define as rotas da API REST da camada de apresentação:
autenticação, perfil, vendas, painel, histórico e relatório mensal.
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from . import views, views_auth


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE AUTENTICAÇÃO
    # ====================================================================
    path('api/auth/cadastro/', views_auth.CadastroUsuarioAPIView.as_view(), name='cadastro'),
    path('api/auth/login/', views_auth.LoginAPIView.as_view(), name='login'),
    path('api/auth/logout/', views_auth.LogoutAPIView.as_view(), name='logout'),
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # ====================================================================
    # 2. ROTAS DE PERFIL
    # ====================================================================
    path('api/perfil/', views.PerfilAPIView.as_view(), name='perfil'),
    path('api/perfil/senha/', views.AlterarSenhaAPIView.as_view(), name='alterar_senha'),

    # ====================================================================
    # 3. ROTAS DE VENDAS E CONSULTAS
    # ====================================================================
    path('api/categorias/', views.CategoriasAPIView.as_view(), name='categorias'),
    path('api/painel/', views.PainelAPIView.as_view(), name='painel'),
    path('api/vendas/', views.VendasAPIView.as_view(), name='vendas'),
    path('api/vendas/<int:pk>/', views.VendaDetalheAPIView.as_view(), name='venda_detalhe'),

    # ====================================================================
    # 4. RELATÓRIO MENSAL
    # ====================================================================
    path('api/relatorio/', views.RelatorioMensalAPIView.as_view(), name='relatorio_mensal'),
]
