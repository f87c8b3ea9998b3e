import logging

from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from vitrine.core.exceptions import (
    AcessoNegadoError,
    ApiError,
    BaseErroCore,
    CarrinhoVazioError,
    DadosInvalidosError,
    StatusInvalidoError,
)
from vitrine.core.use_cases import normalizar_url_imagem

from . import dependency_injection as di
from .permissions import SomenteAutenticados
from .serializers import (
    AdicionarItemSerializer,
    AtualizarItemSerializer,
    CartLineSerializer,
    CheckoutSerializer,
    ItemCarrinhoSerializer,
)

logger = logging.getLogger(__name__)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def resposta_de_erro(e: BaseErroCore) -> Response:
    """Converte as exceções do Core em respostas JSON {'message': ...}."""
    if isinstance(e, ApiError):
        codigo = e.status_code if e.status_code and e.status_code >= 400 else status.HTTP_502_BAD_GATEWAY
        return Response({'message': e.message}, status=codigo)
    if isinstance(e, AcessoNegadoError):
        return Response({'message': e.message}, status=status.HTTP_403_FORBIDDEN)
    if isinstance(e, (DadosInvalidosError, CarrinhoVazioError, StatusInvalidoError)):
        return Response({'message': e.message}, status=status.HTTP_400_BAD_REQUEST)
    logger.error("Erro não mapeado: %s", e)
    return Response({'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def carrinho_payload(cart_store) -> dict:
    itens = CartLineSerializer(cart_store.lines, many=True).data
    for item in itens:
        item['image'] = normalizar_url_imagem(
            item['image'], settings.VITRINE_API_URL, settings.VITRINE_PLACEHOLDER_IMAGE
        )
    return {
        'items': itens,
        'cartTotal': str(cart_store.cart_total),
        'cartQuantity': cart_store.cart_quantity,
    }


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutosAPIView(APIView):
    """Lista de produtos com filtros (keyword, category, sort, featured, limit, page)."""

    def get(self, request):
        try:
            produtos = di.get_listar_produtos_use_case().listar_produtos(request.query_params.dict())
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(produtos)


class DetalheProdutoAPIView(APIView):

    def get(self, request, pk):
        try:
            produto = di.get_listar_produtos_use_case().detalhar_produto(pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(produto)


class CategoriasAPIView(APIView):

    def get(self, request):
        try:
            categorias = di.get_listar_produtos_use_case().listar_categorias()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(categorias)


# ====================================================================
# CARRINHO
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho do visitante (não exige login).
    """

    def get(self, request):
        """
        Retorna o carrinho com os totais derivados.
        """
        return Response(carrinho_payload(di.get_cart_store(request)))

    def post(self, request):
        """
        Adiciona um item ao carrinho, buscando o snapshot do produto na API.
        """
        serializer = AdicionarItemSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        dados = serializer.validated_data

        try:
            produto = di.get_listar_produtos_use_case().detalhar_produto(dados['product_id'])
            di.get_cart_store(request).add_to_cart(
                produto, quantity=dados['quantity'], size=dados['size'], color=dados['color']
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        return Response(carrinho_payload(di.get_cart_store(request)), status=status.HTTP_201_CREATED)

    def patch(self, request):
        """
        Define a quantidade de uma linha (zero remove a linha).
        """
        serializer = AtualizarItemSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        dados = serializer.validated_data

        cart_store = di.get_cart_store(request)
        try:
            cart_store.update_cart_item(
                dados['product_id'], dados['quantity'], size=dados['size'], color=dados['color']
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(carrinho_payload(cart_store))

    def delete(self, request):
        """
        Remove uma linha do carrinho.
        """
        serializer = ItemCarrinhoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        dados = serializer.validated_data

        cart_store = di.get_cart_store(request)
        cart_store.remove_from_cart(dados['product_id'], size=dados['size'], color=dados['color'])
        return Response(carrinho_payload(cart_store))


class LimparCarrinhoAPIView(APIView):

    def delete(self, request):
        cart_store = di.get_cart_store(request)
        cart_store.clear_cart()
        return Response(carrinho_payload(cart_store))


# ====================================================================
# CHECKOUT E PEDIDOS DO CLIENTE
# ====================================================================

class CheckoutAPIView(APIView):
    """
    API View para finalizar o pedido com os itens do carrinho.
    """
    permission_classes = [SomenteAutenticados]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        finalizar_pedido_uc = di.get_finalizar_pedido_use_case(request)
        try:
            pedido = finalizar_pedido_uc.executar(
                endereco=serializer.endereco(),
                metodo_pagamento=serializer.validated_data['paymentMethod'],
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        return Response(
            {'message': 'Pedido realizado com sucesso!', 'order': pedido},
            status=status.HTTP_201_CREATED,
        )


class HistoricoPedidosAPIView(APIView):
    """Pedidos do cliente logado, cada um com o status derivado."""
    permission_classes = [SomenteAutenticados]

    def get(self, request):
        try:
            pedidos = di.get_listar_pedidos_use_case(request).executar()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(pedidos)


class DetalhePedidoAPIView(APIView):
    permission_classes = [SomenteAutenticados]

    def get(self, request, pk):
        try:
            pedido = di.get_listar_pedidos_use_case(request).detalhar(pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(pedido)
