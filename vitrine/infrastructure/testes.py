import unittest
from unittest.mock import Mock

import requests

from vitrine.core.exceptions import ApiError
from vitrine.infrastructure.gateways import StorefrontApiGateway
from vitrine.infrastructure.storage import MemoryStorage, SessionStorage


def _resposta(status_code=200, json_data=None, content=b'{}'):
    response = Mock()
    response.status_code = status_code
    response.content = content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


class StorefrontApiGatewayTestCase(unittest.TestCase):

    def setUp(self):
        """
        Configura o gateway com uma sessão HTTP simulada, sem acesso à rede.
        """
        self.http = Mock()
        self.gateway = StorefrontApiGateway(base_url='http://api.loja:5000/', timeout=5, http=self.http)

    def test_chamada_autenticada_envia_bearer_token(self):
        """
        Cenário: Chamadas autenticadas anexam o token no cabeçalho Authorization.
        """
        # ARRANGE
        self.http.request.return_value = _resposta(json_data=[{'_id': 'o1'}])

        # ACT
        pedidos = self.gateway.listar_meus_pedidos('tok-1')

        # ASSERT
        self.assertEqual(pedidos, [{'_id': 'o1'}])
        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ('GET', 'http://api.loja:5000/api/orders/myorders'))
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer tok-1')
        self.assertEqual(kwargs['timeout'], 5)

    def test_chamada_publica_nao_envia_token(self):
        self.http.request.return_value = _resposta(json_data=[])

        self.gateway.listar_produtos({'category': 'roupas'})

        _, kwargs = self.http.request.call_args
        self.assertNotIn('Authorization', kwargs['headers'])
        self.assertEqual(kwargs['params'], {'category': 'roupas'})

    def test_atualizar_status_envia_corpo(self):
        self.http.request.return_value = _resposta(json_data={'_id': 'o1', 'status': 'shipped'})

        self.gateway.atualizar_status_pedido('o1', 'shipped', 'tok')

        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ('PUT', 'http://api.loja:5000/api/orders/o1/status'))
        self.assertEqual(kwargs['json'], {'status': 'shipped'})

    def test_erro_http_usa_mensagem_da_api(self):
        self.http.request.return_value = _resposta(401, {'message': 'Email ou senha inválidos'})

        with self.assertRaises(ApiError) as ctx:
            self.gateway.login('ana@example.com', 'errada')

        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, 'Email ou senha inválidos')
        self.assertEqual(ctx.exception.detail, 'Email ou senha inválidos')

    def test_erro_http_sem_json(self):
        self.http.request.return_value = _resposta(500, ValueError('sem json'), content=b'<html>')

        with self.assertRaises(ApiError) as ctx:
            self.gateway.buscar_produto('p1')

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIsNone(ctx.exception.detail)
        self.assertIn('500', ctx.exception.message)

    def test_falha_de_rede_vira_api_error(self):
        self.http.request.side_effect = requests.exceptions.ConnectionError('recusada')

        with self.assertRaises(ApiError) as ctx:
            self.gateway.buscar_perfil('tok')

        self.assertIsNone(ctx.exception.status_code)

    def test_resposta_sem_conteudo(self):
        self.http.request.return_value = _resposta(204, content=b'')

        self.assertIsNone(self.gateway.deletar_produto('p1', 'tok'))


class _SessaoFalsa(dict):
    modified = False


class StorageTestCase(unittest.TestCase):

    def test_session_storage_usa_prefixo_e_marca_modificada(self):
        sessao = _SessaoFalsa()
        storage = SessionStorage(sessao)

        storage.set_item('cart', '[]')

        self.assertEqual(sessao['vitrine:cart'], '[]')
        self.assertTrue(sessao.modified)
        self.assertEqual(storage.get_item('cart'), '[]')

        storage.remove_item('cart')
        self.assertIsNone(storage.get_item('cart'))
        storage.remove_item('cart')

    def test_memory_storage(self):
        storage = MemoryStorage({'token': 'abc'})

        self.assertEqual(storage.get_item('token'), 'abc')
        storage.remove_item('token')
        self.assertIsNone(storage.get_item('token'))
