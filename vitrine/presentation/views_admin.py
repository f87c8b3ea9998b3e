# vitrine/presentation/views_admin.py
"""
Views para o painel de administração.
Todas exigem uma sessão com a flag isAdmin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from vitrine.core.exceptions import BaseErroCore

from . import dependency_injection as di
from .permissions import SomenteAdministradores
from .serializers import ProdutoSerializer, StatusPedidoSerializer, UsuarioAdminSerializer
from .views import resposta_de_erro


class AdminAPIView(APIView):
    permission_classes = [SomenteAdministradores]


# ====================================================================
# DASHBOARD
# ====================================================================

class DashboardAdminAPIView(AdminAPIView):
    """
    Estatísticas do painel (vendas, pedidos, produtos, pedidos pendentes).
    """

    def get(self, request):
        try:
            dados = di.get_gerenciar_pedidos_admin_use_case(request).obter_dashboard()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(dados)


# ====================================================================
# GERENCIAMENTO DE PEDIDOS
# ====================================================================

class GerenciarPedidosAPIView(AdminAPIView):
    """
    Lista todos os pedidos com o status derivado; `?status=` filtra por ele.
    """

    def get(self, request):
        try:
            pedidos = di.get_gerenciar_pedidos_admin_use_case(request).listar_todos(
                status=request.query_params.get('status')
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(pedidos)


class AtualizarStatusPedidoAPIView(AdminAPIView):

    def put(self, request, pk):
        serializer = StatusPedidoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = di.get_gerenciar_pedidos_admin_use_case(request).atualizar_status_manual(
                pk, serializer.validated_data['status']
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(pedido)


# ====================================================================
# GERENCIAMENTO DE PRODUTOS
# ====================================================================

class AdicionarProdutoAPIView(AdminAPIView):

    def post(self, request):
        serializer = ProdutoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            produto = di.get_gerenciar_produtos_admin_use_case(request).criar(serializer.to_api())
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(produto, status=status.HTTP_201_CREATED)


class EditarProdutoAPIView(AdminAPIView):

    def put(self, request, pk):
        serializer = ProdutoSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            produto = di.get_gerenciar_produtos_admin_use_case(request).atualizar(pk, serializer.to_api())
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(produto)

    def delete(self, request, pk):
        try:
            di.get_gerenciar_produtos_admin_use_case(request).deletar(pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ====================================================================
# GERENCIAMENTO DE USUÁRIOS
# ====================================================================

class GerenciarUsuariosAPIView(AdminAPIView):
    """Usuários cadastrados, com a quantidade de pedidos de cada um."""

    def get(self, request):
        try:
            usuarios = di.get_gerenciar_usuarios_admin_use_case(request).listar_todos()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(usuarios)


class DetalheUsuarioAPIView(AdminAPIView):

    def get(self, request, pk):
        try:
            usuario = di.get_gerenciar_usuarios_admin_use_case(request).detalhar(pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(usuario)

    def put(self, request, pk):
        serializer = UsuarioAdminSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            usuario = di.get_gerenciar_usuarios_admin_use_case(request).atualizar(pk, serializer.validated_data)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(usuario)

    def delete(self, request, pk):
        try:
            di.get_gerenciar_usuarios_admin_use_case(request).deletar(pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
