# vitrine/core/testes.py

import json
import unittest
from decimal import Decimal
from unittest.mock import Mock

from vitrine.core.auth_session import AuthSessionHolder, LOGIN_FALHOU, CADASTRO_FALHOU
from vitrine.core.cart_store import CartStore
from vitrine.core.exceptions import (
    AcessoNegadoError,
    ApiError,
    CarrinhoVazioError,
    DadosInvalidosError,
    QuantidadeInvalidaError,
    StatusInvalidoError,
)
from vitrine.core.order_status import annotate_order, derive_status, format_status, status_badge
from vitrine.core.use_cases import (
    FinalizarPedidoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarUsuariosAdminUseCase,
    ListarPedidosDoUsuarioUseCase,
    ListarProdutosUseCase,
    normalizar_url_imagem,
)
from vitrine.infrastructure.storage import MemoryStorage


CAMISETA = {'_id': 'p1', 'name': 'Camiseta', 'price': 49.9, 'image': '/uploads/camiseta.jpg', 'brand': 'Acme'}
TENIS = {'_id': 'p2', 'name': 'Tênis', 'price': '199.90', 'image': 'https://cdn.example.com/tenis.jpg'}


class TestCartStore(unittest.TestCase):

    def setUp(self):
        self.storage = MemoryStorage()
        self.store = CartStore(self.storage)

    def _salvo(self):
        return json.loads(self.storage.get_item('cart'))

    def test_adicionar_mesma_chave_soma_quantidade(self):
        """
        Cenário: Adicionar o mesmo produto duas vezes com a mesma variação gera uma linha só.
        """
        # ACT
        self.store.add_to_cart(CAMISETA, 1, size='M', color='azul')
        self.store.add_to_cart(CAMISETA, 2, size='M', color='azul')

        # ASSERT
        self.assertEqual(len(self.store.lines), 1)
        self.assertEqual(self.store.lines[0].quantity, 3)

    def test_adicionar_chaves_diferentes_gera_linhas_distintas(self):
        self.store.add_to_cart(CAMISETA, 1, size='M')
        self.store.add_to_cart(CAMISETA, 1, size='G')
        self.store.add_to_cart(CAMISETA, 1, size='G', color='preto')

        self.assertEqual(len(self.store.lines), 3)

    def test_variacao_vazia_equivale_a_ausente(self):
        self.store.add_to_cart(CAMISETA, 1)
        self.store.add_to_cart(CAMISETA, 1, size='', color='')

        self.assertEqual(len(self.store.lines), 1)
        self.assertEqual(self.store.lines[0].quantity, 2)

    def test_snapshot_dos_dados_do_produto(self):
        line = self.store.add_to_cart(CAMISETA, 1)

        self.assertEqual(line.product_id, 'p1')
        self.assertEqual(line.name, 'Camiseta')
        self.assertEqual(line.price, Decimal('49.9'))
        self.assertEqual(line.image, '/uploads/camiseta.jpg')
        self.assertEqual(line.extras, {'brand': 'Acme'})

    def test_quantidade_invalida_e_rejeitada(self):
        for quantidade in (0, -1, 1.5, True, '2'):
            with self.assertRaises(QuantidadeInvalidaError):
                self.store.add_to_cart(CAMISETA, quantidade)
        self.assertTrue(self.store.is_empty())
        self.assertIsNone(self.storage.get_item('cart'))

    def test_produto_sem_id_e_rejeitado(self):
        with self.assertRaises(DadosInvalidosError):
            self.store.add_to_cart({'name': 'Sem id', 'price': 1})

    def test_produto_com_preco_invalido_e_rejeitado(self):
        """
        Cenário: Um produto da API com preço não numérico não entra no carrinho.
        """
        with self.assertRaises(DadosInvalidosError):
            self.store.add_to_cart({'_id': 'p1', 'name': 'Quebrado', 'price': 'abc'}, 1)

        self.assertTrue(self.store.is_empty())
        self.assertIsNone(self.storage.get_item('cart'))

    def test_totais_sempre_derivados_das_linhas(self):
        """
        Cenário: Depois de uma sequência de operações os totais batem com as linhas.
        """
        self.store.add_to_cart(CAMISETA, 2)
        self.store.add_to_cart(TENIS, 1, size='42')
        self.store.update_cart_item('p1', 5)
        self.store.add_to_cart(TENIS, 1, size='40')
        self.store.remove_from_cart('p2', size='42')

        total_esperado = sum((l.price * l.quantity for l in self.store.lines), Decimal('0'))
        self.assertEqual(self.store.cart_total, total_esperado)
        self.assertEqual(self.store.cart_total, Decimal('49.9') * 5 + Decimal('199.90'))
        self.assertEqual(self.store.cart_quantity, 6)

    def test_update_define_quantidade_sem_somar(self):
        self.store.add_to_cart(CAMISETA, 2, size='M')
        self.store.add_to_cart(CAMISETA, 2, size='G')

        self.store.update_cart_item('p1', 7, size='M')

        self.assertEqual(self.store.get_line('p1', size='M').quantity, 7)
        self.assertEqual(self.store.get_line('p1', size='G').quantity, 2)

    def test_update_com_zero_remove_a_linha(self):
        self.store.add_to_cart(CAMISETA, 2)

        self.store.update_cart_item('p1', 0)

        self.assertTrue(self.store.is_empty())
        self.assertEqual(self._salvo(), [])

    def test_update_e_remove_sem_linha_nao_escrevem(self):
        storage = Mock()
        storage.get_item.return_value = None
        store = CartStore(storage)

        store.update_cart_item('inexistente', 3)
        store.remove_from_cart('inexistente')

        storage.set_item.assert_not_called()

    def test_clear_cart(self):
        self.store.add_to_cart(CAMISETA, 2)
        self.store.clear_cart()

        self.assertTrue(self.store.is_empty())
        self.assertEqual(self.store.cart_total, Decimal('0'))
        self.assertEqual(self._salvo(), [])

    def test_recarregar_do_armazenamento_preserva_linhas(self):
        """
        Cenário: Serializar e recarregar o carrinho produz as mesmas linhas.
        """
        self.store.add_to_cart(CAMISETA, 2, size='M', color='azul')
        self.store.add_to_cart(TENIS, 1)

        recarregado = CartStore(self.storage)

        self.assertEqual(
            sorted(l.key for l in recarregado.lines),
            sorted(l.key for l in self.store.lines),
        )
        self.assertEqual(recarregado.lines, self.store.lines)
        self.assertEqual(recarregado.cart_total, self.store.cart_total)

    def test_carrinho_corrompido_vira_vazio(self):
        for conteudo in ('{nao e json', '{"a": 1}', '[{"name": "sem id"}]', '[1, 2]',
                         '[{"product_id": "p1", "quantity": 0, "price": "1"}]'):
            storage = MemoryStorage({'cart': conteudo})
            with self.assertLogs('vitrine.core.cart_store', level='WARNING'):
                store = CartStore(storage)
            self.assertTrue(store.is_empty(), conteudo)

    def test_formato_legado_do_navegador_e_aceito(self):
        legado = [{'_id': 'p9', 'name': 'Boné', 'price': 30, 'image': 'bone.jpg',
                   'quantity': 2, 'size': None, 'color': 'preto', 'brand': 'Acme'}]
        store = CartStore(MemoryStorage({'cart': json.dumps(legado)}))

        line = store.get_line('p9', color='preto')
        self.assertIsNotNone(line)
        self.assertEqual(line.quantity, 2)
        self.assertEqual(line.price, Decimal('30'))
        self.assertEqual(line.extras, {'brand': 'Acme'})

    def test_nao_escreve_durante_o_carregamento(self):
        storage = Mock()
        storage.get_item.return_value = json.dumps([CAMISETA | {'quantity': 1}])

        store = CartStore(storage)

        storage.set_item.assert_not_called()
        self.assertEqual(store.cart_quantity, 1)

    def test_fila_de_escrita_preserva_ordem(self):
        storage = Mock()
        storage.get_item.return_value = None
        store = CartStore(storage, autoflush=False)

        store.add_to_cart(CAMISETA, 1)
        store.add_to_cart(CAMISETA, 1)
        store.clear_cart()

        self.assertEqual(len(store.pending_writes), 3)
        storage.set_item.assert_not_called()

        self.assertEqual(store.flush(), 3)
        gravados = [json.loads(c.args[1]) for c in storage.set_item.call_args_list]
        self.assertEqual([g[0]['quantity'] if g else 0 for g in gravados], [1, 2, 0])
        self.assertEqual(store.pending_writes, [])

    def test_falha_de_escrita_nao_chega_ao_chamador(self):
        storage = Mock()
        storage.get_item.return_value = None
        storage.set_item.side_effect = OSError("disco cheio")
        store = CartStore(storage)

        with self.assertLogs('vitrine.core.cart_store', level='WARNING'):
            store.add_to_cart(CAMISETA, 1)

        self.assertEqual(store.cart_quantity, 1)


class TestOrderStatus(unittest.TestCase):

    def test_status_explicito_vence(self):
        self.assertEqual(derive_status({'status': 'shipped', 'isPaid': False}), 'shipped')
        self.assertEqual(derive_status({'status': 'Returned', 'isCancelled': True}), 'Returned')

    def test_precedencia_das_flags(self):
        self.assertEqual(derive_status({'isCancelled': True, 'isDelivered': True}), 'cancelled')
        self.assertEqual(derive_status({'isDelivered': True, 'isPaid': True}), 'delivered')

    def test_pedido_pago(self):
        self.assertEqual(derive_status({'isPaid': True, 'trackingNumber': 'T1'}), 'shipped')
        self.assertEqual(derive_status({'isPaid': True}), 'processing')
        self.assertEqual(derive_status({'isPaid': True, 'paymentResult': {'status': 'shipped'}}), 'shipped')
        self.assertEqual(derive_status({'isPaid': True, 'paymentResult': {'status': 'COMPLETED'}}), 'processing')

    def test_status_do_pagamento(self):
        self.assertEqual(derive_status({'paymentResult': {'status': 'pending'}}), 'processing')
        self.assertEqual(derive_status({'paymentResult': {'status': 'refunded'}}), 'refunded')

    def test_padrao_e_processing(self):
        self.assertEqual(derive_status({}), 'processing')
        self.assertEqual(derive_status({'status': '', 'paymentResult': None}), 'processing')
        self.assertEqual(derive_status({'paymentResult': 'lixo'}), 'processing')
        self.assertEqual(derive_status(None), 'processing')

    def test_badge_ignora_maiusculas(self):
        self.assertEqual(status_badge('processing'), 'warning')
        self.assertEqual(status_badge('Shipped'), 'info')
        self.assertEqual(status_badge('DELIVERED'), 'success')
        self.assertEqual(status_badge('cancelled'), 'danger')
        self.assertEqual(status_badge('refunded'), 'neutral')
        self.assertEqual(status_badge(None), 'neutral')

    def test_format_e_annotate(self):
        self.assertEqual(format_status('shipped'), 'Shipped')
        pedido = {'_id': 'o1', 'isPaid': True, 'trackingNumber': 'BR123'}

        anotado = annotate_order(pedido)

        self.assertEqual(anotado['derivedStatus'], 'shipped')
        self.assertEqual(anotado['statusLabel'], 'Shipped')
        self.assertEqual(anotado['statusBadge'], 'info')
        self.assertNotIn('derivedStatus', pedido)


class TestAuthSessionHolder(unittest.TestCase):

    def setUp(self):
        self.api = Mock()
        self.storage = MemoryStorage()
        self.resposta_login = {
            'token': 'tok-1',
            'user': {'_id': 'u1', 'name': 'Ana', 'email': 'ana@example.com', 'isAdmin': False},
        }

    def test_login_com_sucesso_persiste_token(self):
        # ARRANGE
        self.api.login.return_value = self.resposta_login
        holder = AuthSessionHolder(self.api, self.storage)

        # ACT
        ok = holder.login('ana@example.com', 'segredo')

        # ASSERT
        self.assertTrue(ok)
        self.assertTrue(holder.is_authenticated)
        self.assertFalse(holder.is_admin)
        self.assertEqual(holder.user.name, 'Ana')
        self.assertEqual(self.storage.get_item('token'), 'tok-1')
        self.assertEqual(holder.auth_headers(), {'Authorization': 'Bearer tok-1'})

    def test_login_aceita_resposta_achatada(self):
        self.api.login.return_value = {'_id': 'u2', 'name': 'Bia', 'email': 'bia@example.com',
                                       'isAdmin': True, 'token': 'tok-2'}
        holder = AuthSessionHolder(self.api, self.storage)

        self.assertTrue(holder.login('bia@example.com', 'x'))
        self.assertTrue(holder.is_admin)
        self.assertNotIn('token', holder.user.extras)

    def test_login_invalido_mantem_estado_e_retorna_mensagem(self):
        self.api.login.side_effect = ApiError("Credenciais inválidas", status_code=401, detail="Credenciais inválidas")
        holder = AuthSessionHolder(self.api, self.storage)

        ok = holder.login('ana@example.com', 'errada')

        self.assertFalse(ok)
        self.assertFalse(holder.is_authenticated)
        self.assertEqual(holder.error, "Credenciais inválidas")
        self.assertIsNone(self.storage.get_item('token'))

    def test_login_sem_mensagem_da_api_usa_mensagem_padrao(self):
        self.api.login.side_effect = ApiError("Erro de conexão com a API: timeout")
        holder = AuthSessionHolder(self.api, self.storage)

        self.assertFalse(holder.login('ana@example.com', 'x'))
        self.assertEqual(holder.error, LOGIN_FALHOU)

        holder.clear_error()
        self.assertIsNone(holder.error)

    def test_login_falho_nao_derruba_sessao_existente(self):
        self.api.login.return_value = self.resposta_login
        holder = AuthSessionHolder(self.api, self.storage)
        holder.login('ana@example.com', 'segredo')

        self.api.login.side_effect = ApiError("Erro", status_code=500)
        self.assertFalse(holder.login('outro@example.com', 'x'))

        self.assertTrue(holder.is_authenticated)
        self.assertEqual(holder.token, 'tok-1')

    def test_resposta_vazia_ou_que_nao_e_objeto_vira_falha(self):
        """
        Cenário: Login ou cadastro com resposta 2xx sem corpo (ou com uma lista)
        retornam False com a mensagem padrão, sem levantar exceção.
        """
        for resposta in (None, [], ['tok']):
            self.api.login.return_value = resposta
            self.api.registrar.return_value = resposta
            holder = AuthSessionHolder(self.api, self.storage)

            self.assertFalse(holder.login('ana@example.com', 'segredo'))
            self.assertEqual(holder.error, LOGIN_FALHOU)
            self.assertIsNone(holder.error_status)

            self.assertFalse(holder.register('Ana', 'ana@example.com', 'segredo'))
            self.assertEqual(holder.error, CADASTRO_FALHOU)

            self.assertFalse(holder.is_authenticated)
            self.assertIsNone(self.storage.get_item('token'))

    def test_register(self):
        self.api.registrar.return_value = self.resposta_login
        holder = AuthSessionHolder(self.api, self.storage)

        self.assertTrue(holder.register('Ana', 'ana@example.com', 'segredo'))
        self.api.registrar.assert_called_once_with('Ana', 'ana@example.com', 'segredo')
        self.assertEqual(self.storage.get_item('token'), 'tok-1')

    def test_register_falho(self):
        self.api.registrar.side_effect = ApiError("Erro", status_code=400)
        holder = AuthSessionHolder(self.api, self.storage)

        self.assertFalse(holder.register('Ana', 'ana@example.com', 'segredo'))
        self.assertEqual(holder.error, CADASTRO_FALHOU)

    def test_logout_limpa_sessao_e_token(self):
        self.api.login.return_value = self.resposta_login
        holder = AuthSessionHolder(self.api, self.storage)
        holder.login('ana@example.com', 'segredo')

        holder.logout()

        self.assertFalse(holder.is_authenticated)
        self.assertIsNone(self.storage.get_item('token'))
        self.assertEqual(holder.auth_headers(), {})

        # Um "recarregamento" começa sem autenticação e sem chamar a API
        recarregado = AuthSessionHolder(self.api, self.storage)
        self.assertFalse(recarregado.is_authenticated)
        self.api.buscar_perfil.assert_not_called()

    def test_restaura_sessao_com_token_valido(self):
        self.storage.set_item('token', 'tok-salvo')
        self.api.buscar_perfil.return_value = {'_id': 'u1', 'name': 'Ana', 'email': 'a@x.com', 'isAdmin': True}

        holder = AuthSessionHolder(self.api, self.storage)

        self.api.buscar_perfil.assert_called_once_with('tok-salvo')
        self.assertTrue(holder.is_admin)
        self.assertEqual(holder.token, 'tok-salvo')

    def test_token_rejeitado_e_descartado_silenciosamente(self):
        self.storage.set_item('token', 'tok-expirado')
        self.api.buscar_perfil.side_effect = ApiError("Token expirado", status_code=401)

        holder = AuthSessionHolder(self.api, self.storage)

        self.assertFalse(holder.is_authenticated)
        self.assertIsNone(self.storage.get_item('token'))


def _sessao(admin=False, autenticada=True):
    sessao = Mock()
    sessao.is_authenticated = autenticada
    sessao.is_admin = admin
    sessao.token = 'tok' if autenticada else None
    sessao.user.email = 'ana@example.com'
    return sessao


ENDERECO = {
    'fullName': 'Ana Souza', 'address': 'Rua A, 10', 'city': 'Recife',
    'postalCode': '50000-000', 'country': 'Brasil', 'phone': '81999990000',
}


class TestFinalizarPedido(unittest.TestCase):

    def setUp(self):
        self.api = Mock()
        self.carrinho = CartStore(MemoryStorage())
        self.use_case = FinalizarPedidoUseCase(self.api, self.carrinho, _sessao(), taxa_imposto=Decimal('0.10'))

    def test_montar_pedido_calcula_valores(self):
        self.carrinho.add_to_cart(CAMISETA, 2, size='M')
        self.carrinho.add_to_cart(TENIS, 1)

        pedido = self.use_case.montar_pedido(ENDERECO)

        self.assertEqual(len(pedido['orderItems']), 2)
        self.assertEqual(pedido['orderItems'][0],
                         {'product': 'p1', 'name': 'Camiseta', 'qty': 2, 'price': 49.9,
                          'image': '/uploads/camiseta.jpg', 'size': 'M', 'color': None})
        self.assertEqual(pedido['itemsPrice'], 299.7)
        self.assertEqual(pedido['shippingPrice'], 0.0)
        self.assertEqual(pedido['taxPrice'], 29.97)
        self.assertEqual(pedido['totalPrice'], 329.67)
        self.assertEqual(pedido['paymentMethod'], 'card')
        self.assertEqual(pedido['shippingAddress'], ENDERECO)

    def test_checkout_com_sucesso_limpa_carrinho(self):
        self.carrinho.add_to_cart(CAMISETA, 1)
        self.api.criar_pedido.return_value = {'_id': 'o1'}

        criado = self.use_case.executar(ENDERECO)

        self.assertEqual(criado, {'_id': 'o1'})
        self.api.criar_pedido.assert_called_once()
        self.assertEqual(self.api.criar_pedido.call_args.args[1], 'tok')
        self.assertTrue(self.carrinho.is_empty())

    def test_checkout_com_falha_mantem_carrinho(self):
        self.carrinho.add_to_cart(CAMISETA, 1)
        self.api.criar_pedido.side_effect = ApiError("Sem estoque", status_code=400)

        with self.assertRaises(ApiError):
            self.use_case.executar(ENDERECO)

        self.assertEqual(self.carrinho.cart_quantity, 1)

    def test_checkout_com_carrinho_vazio_falha(self):
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar(ENDERECO)
        self.api.criar_pedido.assert_not_called()

    def test_checkout_sem_endereco_completo_falha(self):
        self.carrinho.add_to_cart(CAMISETA, 1)
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(dict(ENDERECO, city=''))
        self.api.criar_pedido.assert_not_called()

    def test_checkout_sem_login_falha(self):
        self.carrinho.add_to_cart(CAMISETA, 1)
        use_case = FinalizarPedidoUseCase(self.api, self.carrinho, _sessao(autenticada=False))
        with self.assertRaises(AcessoNegadoError):
            use_case.executar(ENDERECO)


class TestPedidosEAdmin(unittest.TestCase):

    def setUp(self):
        self.api = Mock()
        self.pedidos = [
            {'_id': 'o1', 'user': {'_id': 'u1'}, 'isPaid': True, 'trackingNumber': 'T1'},
            {'_id': 'o2', 'user': {'_id': 'u1'}, 'isDelivered': True},
            {'_id': 'o3', 'user': 'u2'},
        ]

    def test_pedidos_do_usuario_tem_status_derivado(self):
        self.api.listar_meus_pedidos.return_value = self.pedidos

        pedidos = ListarPedidosDoUsuarioUseCase(self.api, _sessao()).executar()

        self.assertEqual([p['derivedStatus'] for p in pedidos], ['shipped', 'delivered', 'processing'])

    def test_mesmo_pedido_mesmo_status_em_todas_as_telas(self):
        self.api.listar_meus_pedidos.return_value = self.pedidos
        self.api.listar_pedidos.return_value = self.pedidos
        self.api.buscar_pedido.return_value = self.pedidos[0]

        cliente = ListarPedidosDoUsuarioUseCase(self.api, _sessao(admin=True))
        admin = GerenciarPedidosAdminUseCase(self.api, _sessao(admin=True))

        self.assertEqual(
            [p['derivedStatus'] for p in cliente.executar()],
            [p['derivedStatus'] for p in admin.listar_todos()],
        )
        self.assertEqual(cliente.detalhar('o1')['derivedStatus'], 'shipped')

    def test_admin_filtra_pelo_status_derivado(self):
        self.api.listar_pedidos.return_value = self.pedidos
        use_case = GerenciarPedidosAdminUseCase(self.api, _sessao(admin=True))

        self.assertEqual([p['_id'] for p in use_case.listar_todos('delivered')], ['o2'])
        self.assertEqual(len(use_case.listar_todos('all')), 3)

    def test_admin_exige_flag_de_administrador(self):
        use_case = GerenciarPedidosAdminUseCase(self.api, _sessao(admin=False))
        with self.assertRaises(AcessoNegadoError):
            use_case.listar_todos()
        self.api.listar_pedidos.assert_not_called()

    def test_atualizar_status(self):
        self.api.atualizar_status_pedido.return_value = {'_id': 'o1', 'isPaid': True}
        use_case = GerenciarPedidosAdminUseCase(self.api, _sessao(admin=True))

        pedido = use_case.atualizar_status_manual('o1', 'Delivered')

        self.api.atualizar_status_pedido.assert_called_once_with('o1', 'delivered', 'tok')
        self.assertEqual(pedido['derivedStatus'], 'delivered')
        self.assertEqual(pedido['statusBadge'], 'success')

    def test_atualizar_status_invalido(self):
        use_case = GerenciarPedidosAdminUseCase(self.api, _sessao(admin=True))
        with self.assertRaises(StatusInvalidoError):
            use_case.atualizar_status_manual('o1', 'perdido')
        self.api.atualizar_status_pedido.assert_not_called()

    def test_usuarios_com_contagem_de_pedidos(self):
        self.api.listar_usuarios.return_value = [{'_id': 'u1'}, {'_id': 'u2'}, {'_id': 'u3'}]
        self.api.listar_pedidos.return_value = self.pedidos

        usuarios = GerenciarUsuariosAdminUseCase(self.api, _sessao(admin=True)).listar_todos()

        self.assertEqual([u['orderCount'] for u in usuarios], [2, 1, 0])


class TestCatalogo(unittest.TestCase):

    def test_normalizar_url_imagem(self):
        base = 'http://api.loja:5000/'
        self.assertEqual(normalizar_url_imagem('https://cdn/x.jpg', base, '/ph.jpg'), 'https://cdn/x.jpg')
        self.assertEqual(normalizar_url_imagem('/uploads/x.jpg', base, '/ph.jpg'), 'http://api.loja:5000/uploads/x.jpg')
        self.assertEqual(normalizar_url_imagem('uploads/x.jpg', base, '/ph.jpg'), 'http://api.loja:5000/uploads/x.jpg')
        self.assertEqual(normalizar_url_imagem(None, base, '/ph.jpg'), '/ph.jpg')

    def test_listar_produtos_repassa_filtros_conhecidos(self):
        api = Mock()
        api.listar_produtos.return_value = [CAMISETA]
        use_case = ListarProdutosUseCase(api, 'http://api', '/ph.jpg')

        produtos = use_case.listar_produtos({'category': 'roupas', 'limit': '4', 'hack': 'x', 'keyword': ''})

        api.listar_produtos.assert_called_once_with({'category': 'roupas', 'limit': '4'})
        self.assertEqual(produtos[0]['image'], 'http://api/uploads/camiseta.jpg')

    def test_listar_produtos_paginado(self):
        api = Mock()
        api.listar_produtos.return_value = {'products': [TENIS], 'page': 1, 'pages': 3}

        resultado = ListarProdutosUseCase(api, 'http://api', '/ph.jpg').listar_produtos()

        self.assertEqual(resultado['pages'], 3)
        self.assertEqual(resultado['products'][0]['image'], TENIS['image'])


if __name__ == '__main__':
    unittest.main()
