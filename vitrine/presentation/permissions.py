from rest_framework.permissions import BasePermission

from . import dependency_injection as di


class SomenteAutenticados(BasePermission):
    """Exige uma sessão válida (token aceito pela API remota)."""
    message = 'É necessário estar autenticado.'

    def has_permission(self, request, view):
        return di.get_auth_session(request).is_authenticated


class SomenteAdministradores(BasePermission):
    """Exige uma sessão de administrador (flag isAdmin do perfil)."""
    message = 'Acesso restrito a administradores.'

    def has_permission(self, request, view):
        return di.get_auth_session(request).is_admin
