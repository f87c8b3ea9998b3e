"""
Define as rotas JSON da vitrine: catálogo, carrinho, checkout, autenticação,
área do cliente e painel administrativo.
"""
from django.urls import path
from . import views, views_auth, views_admin


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE CATÁLOGO
    # ====================================================================
    path('api/catalogo/produtos/', views.ProdutosAPIView.as_view(), name='lista_produtos'),
    path('api/catalogo/produtos/<str:pk>/', views.DetalheProdutoAPIView.as_view(), name='detalhe_produto'),
    path('api/catalogo/categorias/', views.CategoriasAPIView.as_view(), name='lista_categorias'),

    # ====================================================================
    # 2. ROTAS DE COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('api/carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/carrinho/limpar/', views.LimparCarrinhoAPIView.as_view(), name='limpar_carrinho'),
    path('api/checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 3. ROTAS DE AUTENTICAÇÃO
    # ====================================================================
    path('api/auth/login/', views_auth.LoginAPIView.as_view(), name='login'),
    path('api/auth/cadastro/', views_auth.CadastroAPIView.as_view(), name='cadastro'),
    path('api/auth/logout/', views_auth.LogoutAPIView.as_view(), name='logout'),
    path('api/auth/sessao/', views_auth.SessaoAPIView.as_view(), name='sessao'),

    # ====================================================================
    # 4. ROTAS DE PERFIL (ÁREA DO CLIENTE)
    # ====================================================================
    path('api/minha-conta/pedidos/', views.HistoricoPedidosAPIView.as_view(), name='historico_pedidos'),
    path('api/minha-conta/pedidos/<str:pk>/', views.DetalhePedidoAPIView.as_view(), name='detalhe_pedido'),

    # ====================================================================
    # 5. ROTAS ADMINISTRATIVAS
    # ====================================================================
    path('api/admin/dashboard/', views_admin.DashboardAdminAPIView.as_view(), name='admin_dashboard'),

    # Gerenciamento de Pedidos (Admin)
    path('api/admin/pedidos/', views_admin.GerenciarPedidosAPIView.as_view(), name='gerenciar_pedidos'),
    path('api/admin/pedidos/<str:pk>/status/', views_admin.AtualizarStatusPedidoAPIView.as_view(), name='admin_atualizar_status'),

    # Gerenciamento de Produtos (Admin)
    path('api/admin/produtos/', views_admin.AdicionarProdutoAPIView.as_view(), name='admin_adicionar_produto'),
    path('api/admin/produtos/<str:pk>/', views_admin.EditarProdutoAPIView.as_view(), name='admin_editar_produto'),

    # Gerenciamento de Usuários (Admin)
    path('api/admin/usuarios/', views_admin.GerenciarUsuariosAPIView.as_view(), name='gerenciar_usuarios'),
    path('api/admin/usuarios/<str:pk>/', views_admin.DetalheUsuarioAPIView.as_view(), name='admin_detalhe_usuario'),
]
