import json
import threading
from unittest.mock import Mock, patch

from django.contrib.sessions.backends.signed_cookies import SessionStore
from django.test import SimpleTestCase
from rest_framework.test import APIRequestFactory

from vitrine.core.auth_session import LOGIN_FALHOU
from vitrine.core.exceptions import ApiError
from vitrine.presentation import dependency_injection, views, views_admin, views_auth
from vitrine.presentation.context_processors import vitrine_context

PRODUTO = {'_id': 'p1', 'name': 'Camiseta', 'price': 50, 'image': '/uploads/camiseta.jpg'}
PERFIL_CLIENTE = {'_id': 'u1', 'name': 'Ana', 'email': 'ana@example.com', 'isAdmin': False}
PERFIL_ADMIN = {'_id': 'u9', 'name': 'Admin', 'email': 'admin@example.com', 'isAdmin': True}
ENDERECO = {
    'fullName': 'Ana Souza', 'address': 'Rua A, 10', 'city': 'Recife',
    'postalCode': '50000-000', 'country': 'Brasil', 'phone': '81999990000',
}


class VitrineViewTestCase(SimpleTestCase):
    """
    Base dos testes das views: a API remota é um Mock e a sessão do visitante
    é compartilhada entre as requisições de um mesmo teste.
    """

    def setUp(self):
        self.factory = APIRequestFactory()
        self.api = Mock()
        self.session = SessionStore()
        patcher = patch('vitrine.presentation.dependency_injection.get_api_gateway', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)

    def call(self, view_class, method, path, data=None, **kwargs):
        request = getattr(self.factory, method)(path, data, format='json')
        request.session = self.session
        return view_class.as_view()(request, **kwargs)

    def login_como(self, perfil):
        self.session['vitrine:token'] = 'tok'
        self.api.buscar_perfil.return_value = perfil


class CarrinhoViewsTestCase(VitrineViewTestCase):

    def test_adicionar_e_recarregar_carrinho(self):
        """
        Cenário: O carrinho adicionado numa requisição continua lá na próxima.
        """
        # ARRANGE
        self.api.buscar_produto.return_value = PRODUTO

        # ACT
        response = self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/',
                             {'product_id': 'p1', 'quantity': 2, 'size': 'M'})

        # ASSERT
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['cartQuantity'], 2)
        self.assertEqual(response.data['cartTotal'], '100')
        self.assertEqual(response.data['items'][0]['image'], 'http://localhost:5000/uploads/camiseta.jpg')

        response = self.call(views.CarrinhoAPIView, 'get', '/api/carrinho/')
        self.assertEqual(response.data['cartQuantity'], 2)
        self.assertEqual(response.data['items'][0]['size'], 'M')

    def test_quantidade_invalida_e_rejeitada_antes_da_api(self):
        response = self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'p1', 'quantity': 0})

        self.assertEqual(response.status_code, 400)
        self.api.buscar_produto.assert_not_called()

    def test_produto_inexistente(self):
        self.api.buscar_produto.side_effect = ApiError('Produto não encontrado', status_code=404)

        response = self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'x'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Produto não encontrado')

    def test_produto_com_preco_invalido(self):
        """
        Cenário: Produto da API com preço não numérico responde 400, sem quebrar.
        """
        self.api.buscar_produto.return_value = {'_id': 'p1', 'name': 'Quebrado', 'price': 'abc'}

        response = self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'p1'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('message', response.data)
        self.assertNotIn('vitrine:cart', self.session)

    def test_atualizar_remover_e_limpar(self):
        self.api.buscar_produto.return_value = PRODUTO
        self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'p1', 'quantity': 1})

        response = self.call(views.CarrinhoAPIView, 'patch', '/api/carrinho/', {'product_id': 'p1', 'quantity': 4})
        self.assertEqual(response.data['cartQuantity'], 4)

        response = self.call(views.CarrinhoAPIView, 'patch', '/api/carrinho/', {'product_id': 'p1', 'quantity': 0})
        self.assertEqual(response.data['cartQuantity'], 0)

        self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'p1', 'quantity': 1})
        response = self.call(views.CarrinhoAPIView, 'delete', '/api/carrinho/', {'product_id': 'p1'})
        self.assertEqual(response.data['items'], [])

        self.call(views.CarrinhoAPIView, 'post', '/api/carrinho/', {'product_id': 'p1', 'quantity': 1})
        response = self.call(views.LimparCarrinhoAPIView, 'delete', '/api/carrinho/limpar/')
        self.assertEqual(response.data['cartQuantity'], 0)

    def test_carrinho_corrompido_na_sessao(self):
        self.session['vitrine:cart'] = 'isto não é json'

        response = self.call(views.CarrinhoAPIView, 'get', '/api/carrinho/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['items'], [])


class AuthViewsTestCase(VitrineViewTestCase):

    def test_login_com_sucesso(self):
        self.api.login.return_value = dict(PERFIL_CLIENTE, token='tok-novo')

        response = self.call(views_auth.LoginAPIView, 'post', '/api/auth/login/',
                             {'email': 'ana@example.com', 'password': 'segredo'})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['isAuthenticated'])
        self.assertEqual(self.session['vitrine:token'], 'tok-novo')

    def test_login_invalido(self):
        self.api.login.side_effect = ApiError('Senha incorreta', status_code=401, detail='Senha incorreta')

        response = self.call(views_auth.LoginAPIView, 'post', '/api/auth/login/',
                             {'email': 'ana@example.com', 'password': 'x'})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Senha incorreta')
        self.assertNotIn('vitrine:token', self.session)

    def test_login_com_api_fora_do_ar(self):
        self.api.login.side_effect = ApiError('Erro de conexão com a API: recusada')

        response = self.call(views_auth.LoginAPIView, 'post', '/api/auth/login/',
                             {'email': 'ana@example.com', 'password': 'segredo'})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.data['message'], LOGIN_FALHOU)

    def test_login_com_resposta_vazia(self):
        self.api.login.return_value = None

        response = self.call(views_auth.LoginAPIView, 'post', '/api/auth/login/',
                             {'email': 'ana@example.com', 'password': 'segredo'})

        self.assertEqual(response.status_code, 502)
        self.assertNotIn('vitrine:token', self.session)

    def test_cadastro_recusado_pela_api(self):
        self.api.registrar.side_effect = ApiError('Usuário já existe', status_code=400, detail='Usuário já existe')

        response = self.call(views_auth.CadastroAPIView, 'post', '/api/auth/cadastro/',
                             {'name': 'Ana', 'email': 'ana@example.com', 'password': 'segredo'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Usuário já existe')

    def test_cadastro(self):
        self.api.registrar.return_value = {'token': 'tok', 'user': PERFIL_CLIENTE}

        response = self.call(views_auth.CadastroAPIView, 'post', '/api/auth/cadastro/',
                             {'name': 'Ana', 'email': 'ana@example.com', 'password': 'segredo'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['user']['name'], 'Ana')

    def test_logout_e_sessao(self):
        self.login_como(PERFIL_ADMIN)

        response = self.call(views_auth.SessaoAPIView, 'get', '/api/auth/sessao/')
        self.assertTrue(response.data['isAdmin'])

        response = self.call(views_auth.LogoutAPIView, 'post', '/api/auth/logout/')
        self.assertFalse(response.data['isAuthenticated'])
        self.assertNotIn('vitrine:token', self.session)

    def test_token_expirado_desloga_silenciosamente(self):
        self.session['vitrine:token'] = 'tok-velho'
        self.api.buscar_perfil.side_effect = ApiError('jwt expired', status_code=401)

        response = self.call(views_auth.SessaoAPIView, 'get', '/api/auth/sessao/')

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.data['isAuthenticated'])
        self.assertNotIn('vitrine:token', self.session)


class CheckoutEPedidosTestCase(VitrineViewTestCase):

    def setUp(self):
        super().setUp()
        self.session['vitrine:cart'] = json.dumps([
            {'product_id': 'p1', 'name': 'Camiseta', 'price': '50', 'image': None,
             'quantity': 2, 'size': None, 'color': None, 'extras': {}},
        ])

    def test_checkout_exige_login(self):
        response = self.call(views.CheckoutAPIView, 'post', '/api/checkout/', ENDERECO)

        self.assertEqual(response.status_code, 403)
        self.api.criar_pedido.assert_not_called()

    def test_checkout_com_sucesso_limpa_carrinho(self):
        self.login_como(PERFIL_CLIENTE)
        self.api.criar_pedido.return_value = {'_id': 'o1'}

        response = self.call(views.CheckoutAPIView, 'post', '/api/checkout/', ENDERECO)

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order'], {'_id': 'o1'})
        pedido = self.api.criar_pedido.call_args.args[0]
        self.assertEqual(pedido['itemsPrice'], 100.0)
        self.assertEqual(pedido['taxPrice'], 10.0)
        self.assertEqual(pedido['totalPrice'], 110.0)
        self.assertEqual(json.loads(self.session['vitrine:cart']), [])

    def test_checkout_com_erro_da_api_mantem_carrinho(self):
        self.login_como(PERFIL_CLIENTE)
        self.api.criar_pedido.side_effect = ApiError('Estoque insuficiente', status_code=400)

        response = self.call(views.CheckoutAPIView, 'post', '/api/checkout/', ENDERECO)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Estoque insuficiente')
        self.assertEqual(len(json.loads(self.session['vitrine:cart'])), 1)

    def test_checkout_com_dados_incompletos(self):
        self.login_como(PERFIL_CLIENTE)

        response = self.call(views.CheckoutAPIView, 'post', '/api/checkout/', {'fullName': 'Ana'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('city', response.data)

    def test_historico_com_status_derivado(self):
        self.login_como(PERFIL_CLIENTE)
        self.api.listar_meus_pedidos.return_value = [{'_id': 'o1', 'isPaid': True}]

        response = self.call(views.HistoricoPedidosAPIView, 'get', '/api/minha-conta/pedidos/')

        self.assertEqual(response.data[0]['derivedStatus'], 'processing')
        self.assertEqual(response.data[0]['statusBadge'], 'warning')

    def test_api_fora_do_ar(self):
        self.login_como(PERFIL_CLIENTE)
        self.api.listar_meus_pedidos.side_effect = ApiError('Erro de conexão com a API')

        response = self.call(views.HistoricoPedidosAPIView, 'get', '/api/minha-conta/pedidos/')

        self.assertEqual(response.status_code, 502)


class AdminViewsTestCase(VitrineViewTestCase):

    def test_cliente_nao_acessa_admin(self):
        self.login_como(PERFIL_CLIENTE)

        response = self.call(views_admin.GerenciarPedidosAPIView, 'get', '/api/admin/pedidos/')

        self.assertEqual(response.status_code, 403)
        self.api.listar_pedidos.assert_not_called()

    def test_listar_pedidos_filtrando_status(self):
        self.login_como(PERFIL_ADMIN)
        self.api.listar_pedidos.return_value = [
            {'_id': 'o1', 'isPaid': True, 'trackingNumber': 'T1'},
            {'_id': 'o2', 'status': 'delivered'},
        ]

        response = self.call(views_admin.GerenciarPedidosAPIView, 'get', '/api/admin/pedidos/?status=shipped')

        self.assertEqual([p['_id'] for p in response.data], ['o1'])

    def test_atualizar_status(self):
        self.login_como(PERFIL_ADMIN)
        self.api.atualizar_status_pedido.return_value = {'_id': 'o1'}

        response = self.call(views_admin.AtualizarStatusPedidoAPIView, 'put',
                             '/api/admin/pedidos/o1/status/', {'status': 'cancelled'}, pk='o1')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['statusBadge'], 'danger')

        response = self.call(views_admin.AtualizarStatusPedidoAPIView, 'put',
                             '/api/admin/pedidos/o1/status/', {'status': 'perdido'}, pk='o1')
        self.assertEqual(response.status_code, 400)

    def test_produtos(self):
        self.login_como(PERFIL_ADMIN)
        self.api.criar_produto.return_value = {'_id': 'p5', 'name': 'Boné'}

        response = self.call(views_admin.AdicionarProdutoAPIView, 'post', '/api/admin/produtos/',
                             {'name': 'Boné', 'price': '29.90', 'countInStock': 3})

        self.assertEqual(response.status_code, 201)
        self.api.criar_produto.assert_called_once_with({'name': 'Boné', 'price': 29.9, 'countInStock': 3}, 'tok')

        response = self.call(views_admin.EditarProdutoAPIView, 'delete', '/api/admin/produtos/p5/', pk='p5')
        self.assertEqual(response.status_code, 204)
        self.api.deletar_produto.assert_called_once_with('p5', 'tok')

    def test_usuarios_e_dashboard(self):
        self.login_como(PERFIL_ADMIN)
        self.api.listar_usuarios.return_value = [{'_id': 'u1'}]
        self.api.listar_pedidos.return_value = [{'_id': 'o1', 'user': {'_id': 'u1'}}]
        self.api.obter_dashboard.return_value = {'totalOrders': 1}

        response = self.call(views_admin.GerenciarUsuariosAPIView, 'get', '/api/admin/usuarios/')
        self.assertEqual(response.data[0]['orderCount'], 1)

        response = self.call(views_admin.DashboardAdminAPIView, 'get', '/api/admin/dashboard/')
        self.assertEqual(response.data, {'totalOrders': 1})


class ContextProcessorTestCase(VitrineViewTestCase):

    def test_resumo_do_carrinho_e_sessao(self):
        self.login_como(PERFIL_ADMIN)
        self.session['vitrine:cart'] = json.dumps([
            {'product_id': 'p1', 'name': 'Camiseta', 'price': '50', 'quantity': 3},
        ])
        request = self.factory.get('/')
        request.session = self.session

        contexto = vitrine_context(request)

        self.assertEqual(contexto['cart_quantity'], 3)
        self.assertEqual(str(contexto['cart_total']), '150')
        self.assertTrue(contexto['is_admin'])


class GatewayPorThreadTestCase(SimpleTestCase):

    def test_cada_thread_tem_seu_gateway(self):
        """
        Cenário: A mesma thread reaproveita o gateway; outra thread recebe outro
        (com seu próprio requests.Session).
        """
        self.addCleanup(lambda: vars(dependency_injection._local).pop('api_gateway', None))
        principal = dependency_injection.get_api_gateway()
        da_outra_thread = []

        thread = threading.Thread(target=lambda: da_outra_thread.append(dependency_injection.get_api_gateway()))
        thread.start()
        thread.join()

        self.assertIs(dependency_injection.get_api_gateway(), principal)
        self.assertIsNot(da_outra_thread[0], principal)
        self.assertIsNot(da_outra_thread[0].http, principal.http)
