# vitrine/core/use_cases.py
"""
Implementação dos Casos de Uso da vitrine.
Esta camada depende apenas das Entidades, das Portas e dos três componentes do Core
(CartStore, AuthSessionHolder e derivação de status), garantindo o isolamento
da lógica em relação ao Django e ao `requests`.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from vitrine.core.auth_session import AuthSessionHolder
from vitrine.core.cart_store import CartStore
from vitrine.core.exceptions import (
    AcessoNegadoError,
    CarrinhoVazioError,
    DadosInvalidosError,
    StatusInvalidoError,
)
from vitrine.core.order_status import STATUS_CHOICES, annotate_order
from vitrine.core.ports import IStorefrontApi

logger = logging.getLogger(__name__)

CENTAVOS = Decimal('0.01')


def _dinheiro(valor: Decimal) -> Decimal:
    return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def normalizar_url_imagem(caminho: Optional[str], api_base_url: str, placeholder: str) -> str:
    """
    URLs absolutas passam direto; caminhos relativos ganham o prefixo da API;
    caminho vazio vira a imagem placeholder.
    """
    if not caminho:
        return placeholder
    if caminho.startswith('http://') or caminho.startswith('https://'):
        return caminho
    base = api_base_url.rstrip('/')
    if caminho.startswith('/'):
        return f"{base}{caminho}"
    return f"{base}/{caminho}"


def _exigir_autenticado(sessao: AuthSessionHolder) -> str:
    if not sessao.is_authenticated:
        raise AcessoNegadoError("É necessário estar autenticado.")
    return sessao.token


def _exigir_admin(sessao: AuthSessionHolder) -> str:
    token = _exigir_autenticado(sessao)
    if not sessao.is_admin:
        raise AcessoNegadoError("Acesso restrito a administradores.")
    return token


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso responsável por listar produtos e categorias da API."""

    FILTROS_ACEITOS = ('keyword', 'category', 'sort', 'featured', 'limit', 'page')

    def __init__(self, api: IStorefrontApi, api_base_url: str, placeholder: str):
        self.api = api
        self.api_base_url = api_base_url
        self.placeholder = placeholder

    def _com_imagem(self, produto: Mapping[str, Any]) -> Dict[str, Any]:
        produto = dict(produto)
        produto['image'] = normalizar_url_imagem(produto.get('image'), self.api_base_url, self.placeholder)
        return produto

    def listar_produtos(self, filtros: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Repassa apenas os filtros conhecidos. A API pode devolver uma lista ou
        um objeto paginado ({products, page, pages}); os dois formatos são aceitos.
        """
        filtros = {k: v for k, v in (filtros or {}).items() if k in self.FILTROS_ACEITOS and v not in (None, '')}
        resultado = self.api.listar_produtos(filtros)
        if isinstance(resultado, Mapping) and isinstance(resultado.get('products'), list):
            resultado = dict(resultado)
            resultado['products'] = [self._com_imagem(p) for p in resultado['products']]
            return resultado
        return [self._com_imagem(p) for p in (resultado or [])]

    def detalhar_produto(self, produto_id: str) -> Dict[str, Any]:
        return self._com_imagem(self.api.buscar_produto(produto_id))

    def listar_categorias(self) -> List[Any]:
        return self.api.listar_categorias()


# ====================================================================
# 2. CASO DE USO DE CHECKOUT
# ====================================================================

class FinalizarPedidoUseCase:
    """
    Monta o pedido a partir do carrinho, envia para a API e esvazia o carrinho
    somente se a API aceitar o pedido.
    """

    CAMPOS_ENDERECO = ('fullName', 'address', 'city', 'postalCode', 'country', 'phone')

    def __init__(self, api: IStorefrontApi, carrinho: CartStore, sessao: AuthSessionHolder,
                 taxa_imposto: Decimal = Decimal('0.10')):
        self.api = api
        self.carrinho = carrinho
        self.sessao = sessao
        self.taxa_imposto = Decimal(str(taxa_imposto))

    def montar_pedido(self, endereco: Mapping[str, Any], metodo_pagamento: str = 'card') -> Dict[str, Any]:
        """Gera o payload de `POST /api/orders` com itens, endereço e valores."""
        if self.carrinho.is_empty():
            raise CarrinhoVazioError("Não é possível finalizar o checkout com o carrinho vazio.")

        faltando = [campo for campo in self.CAMPOS_ENDERECO if not endereco.get(campo)]
        if faltando:
            raise DadosInvalidosError(f"Campos de entrega obrigatórios: {', '.join(faltando)}.")

        itens_preco = _dinheiro(self.carrinho.cart_total)
        frete = Decimal('0.00')
        imposto = _dinheiro(itens_preco * self.taxa_imposto)

        return {
            'orderItems': [
                {
                    'product': line.product_id,
                    'name': line.name,
                    'qty': line.quantity,
                    'price': float(line.price),
                    'image': line.image,
                    'size': line.size,
                    'color': line.color,
                }
                for line in self.carrinho.lines
            ],
            'shippingAddress': {campo: endereco.get(campo) for campo in self.CAMPOS_ENDERECO},
            'paymentMethod': metodo_pagamento or 'card',
            'itemsPrice': float(itens_preco),
            'shippingPrice': float(frete),
            'taxPrice': float(imposto),
            'totalPrice': float(itens_preco + frete + imposto),
        }

    def executar(self, endereco: Mapping[str, Any], metodo_pagamento: str = 'card') -> Dict[str, Any]:
        """Processa o checkout. ApiError propaga e o carrinho é mantido."""
        token = _exigir_autenticado(self.sessao)
        pedido = self.montar_pedido(endereco, metodo_pagamento)
        criado = self.api.criar_pedido(pedido, token)
        self.carrinho.clear_cart()
        pedido_id = criado.get('_id') if isinstance(criado, Mapping) else None
        logger.info("Pedido %s criado para %s", pedido_id, self.sessao.user.email)
        return criado


# ====================================================================
# 3. CASOS DE USO DO CLIENTE
# ====================================================================

class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos do cliente com o status derivado."""

    def __init__(self, api: IStorefrontApi, sessao: AuthSessionHolder):
        self.api = api
        self.sessao = sessao

    def executar(self) -> List[Dict[str, Any]]:
        token = _exigir_autenticado(self.sessao)
        return [annotate_order(pedido) for pedido in self.api.listar_meus_pedidos(token)]

    def detalhar(self, pedido_id: str) -> Dict[str, Any]:
        token = _exigir_autenticado(self.sessao)
        return annotate_order(self.api.buscar_pedido(pedido_id, token))


# ====================================================================
# 4. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e atualização de pedidos (acesso administrativo)."""

    def __init__(self, api: IStorefrontApi, sessao: AuthSessionHolder):
        self.api = api
        self.sessao = sessao

    def listar_todos(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Lista todos os pedidos, com filtro opcional pelo status derivado."""
        token = _exigir_admin(self.sessao)
        pedidos = [annotate_order(pedido) for pedido in self.api.listar_pedidos(token)]
        if status and status != 'all':
            pedidos = [p for p in pedidos if p['derivedStatus'].lower() == status.lower()]
        return pedidos

    def atualizar_status_manual(self, pedido_id: str, novo_status: str) -> Dict[str, Any]:
        """Atualiza o status de um pedido manualmente (ex: por um administrador)."""
        token = _exigir_admin(self.sessao)
        novo_status_lower = (novo_status or '').lower()
        if novo_status_lower not in STATUS_CHOICES:
            raise StatusInvalidoError(f"O status '{novo_status}' não é um status de pedido válido.")

        resultado = self.api.atualizar_status_pedido(pedido_id, novo_status_lower, token)
        pedido = dict(resultado) if isinstance(resultado, Mapping) else {'_id': pedido_id}
        pedido['status'] = novo_status_lower
        return annotate_order(pedido)

    def obter_dashboard(self) -> Dict[str, Any]:
        token = _exigir_admin(self.sessao)
        return self.api.obter_dashboard(token)


class GerenciarProdutosAdminUseCase:
    """Caso de Uso para criação, edição e remoção de produtos."""

    def __init__(self, api: IStorefrontApi, sessao: AuthSessionHolder):
        self.api = api
        self.sessao = sessao

    def criar(self, dados: Mapping[str, Any]) -> Dict[str, Any]:
        return self.api.criar_produto(dict(dados), _exigir_admin(self.sessao))

    def atualizar(self, produto_id: str, dados: Mapping[str, Any]) -> Dict[str, Any]:
        return self.api.atualizar_produto(produto_id, dict(dados), _exigir_admin(self.sessao))

    def deletar(self, produto_id: str):
        self.api.deletar_produto(produto_id, _exigir_admin(self.sessao))


class GerenciarUsuariosAdminUseCase:
    """Caso de Uso para usuários no painel administrativo."""

    def __init__(self, api: IStorefrontApi, sessao: AuthSessionHolder):
        self.api = api
        self.sessao = sessao

    def listar_todos(self) -> List[Dict[str, Any]]:
        """Retorna os usuários com a contagem de pedidos de cada um."""
        token = _exigir_admin(self.sessao)
        usuarios = self.api.listar_usuarios(token)
        pedidos = self.api.listar_pedidos(token)

        contagem: Dict[str, int] = {}
        for pedido in pedidos:
            usuario = pedido.get('user')
            if isinstance(usuario, Mapping):
                usuario_id = usuario.get('_id')
            else:
                usuario_id = usuario
            if usuario_id:
                contagem[str(usuario_id)] = contagem.get(str(usuario_id), 0) + 1

        resultado = []
        for usuario in usuarios:
            usuario = dict(usuario)
            usuario['orderCount'] = contagem.get(str(usuario.get('_id')), 0)
            resultado.append(usuario)
        return resultado

    def detalhar(self, usuario_id: str) -> Dict[str, Any]:
        return self.api.buscar_usuario(usuario_id, _exigir_admin(self.sessao))

    def atualizar(self, usuario_id: str, dados: Mapping[str, Any]) -> Dict[str, Any]:
        return self.api.atualizar_usuario(usuario_id, dict(dados), _exigir_admin(self.sessao))

    def deletar(self, usuario_id: str):
        self.api.deletar_usuario(usuario_id, _exigir_admin(self.sessao))
