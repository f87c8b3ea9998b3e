# vitrine/presentation/views_auth.py
"""
Views para autenticação e registro de usuários (delegados à API remota).
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from . import dependency_injection as di
from .serializers import LoginSerializer, RegistroSerializer


def status_da_falha(holder, padrao: int) -> int:
    """Falhas sem código HTTP (rede ou resposta inválida) viram 502."""
    if holder.error_status is None:
        return status.HTTP_502_BAD_GATEWAY
    return padrao


def sessao_payload(holder) -> dict:
    return {
        'isAuthenticated': holder.is_authenticated,
        'isAdmin': holder.is_admin,
        'user': holder.user.to_dict() if holder.user else None,
    }


class LoginAPIView(APIView):
    """
    Login na API da loja. O token fica salvo na sessão do visitante.
    """

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        holder = di.get_auth_session(request)
        if holder.login(serializer.validated_data['email'], serializer.validated_data['password']):
            return Response(sessao_payload(holder))
        return Response({'message': holder.error}, status=status_da_falha(holder, status.HTTP_401_UNAUTHORIZED))


class CadastroAPIView(APIView):
    """
    Cadastro de usuário. Em caso de sucesso a sessão já é iniciada.
    """

    def post(self, request):
        serializer = RegistroSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        dados = serializer.validated_data
        holder = di.get_auth_session(request)
        if holder.register(dados['name'], dados['email'], dados['password']):
            return Response(sessao_payload(holder), status=status.HTTP_201_CREATED)
        return Response({'message': holder.error}, status=status_da_falha(holder, status.HTTP_400_BAD_REQUEST))


class LogoutAPIView(APIView):
    """
    Saída do usuário. O carrinho é mantido.
    """

    def post(self, request):
        holder = di.get_auth_session(request)
        holder.logout()
        return Response(sessao_payload(holder))


class SessaoAPIView(APIView):
    """Estado atual da sessão (usado pelo front para montar menus e rotas protegidas)."""

    def get(self, request):
        return Response(sessao_payload(di.get_auth_session(request)))
