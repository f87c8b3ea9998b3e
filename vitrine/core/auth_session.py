# vitrine/core/auth_session.py
"""
Guarda a sessão autenticada (usuário + token) do visitante.

O token é persistido no armazenamento local e anexado às chamadas autenticadas
à API remota. Falhas de login/cadastro nunca levantam exceção: viram um retorno
False e uma mensagem legível em `error`.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from vitrine.core.entities import Session, UserProfile
from vitrine.core.exceptions import ApiError
from vitrine.core.ports import ILocalStorage, IStorefrontApi

logger = logging.getLogger(__name__)

LOGIN_FALHOU = "Falha no login."
CADASTRO_FALHOU = "Falha no cadastro."


def _session_from_response(data: Mapping[str, Any]) -> Session:
    """
    A API devolve o perfil em `user` ou "achatado" no nível de cima junto do token.
    Levanta ApiError se a resposta não for um objeto ou não trouxer o token.
    """
    if not isinstance(data, Mapping):
        raise ApiError("Resposta inválida da API.")
    token = data.get('token')
    if not token:
        raise ApiError("A resposta da API não contém um token.")
    user_data = data.get('user')
    if not isinstance(user_data, Mapping):
        user_data = data
    return Session(user=UserProfile.from_api(user_data), token=str(token))


class AuthSessionHolder:
    """Dono exclusivo da sessão; as views apenas leem o estado derivado."""

    STORAGE_KEY = 'token'

    def __init__(self, api: IStorefrontApi, storage: ILocalStorage, restore: bool = True):
        self.api = api
        self.storage = storage
        self.session: Optional[Session] = None
        self.error: Optional[str] = None
        # Código HTTP da última falha de login/cadastro (None em falha de rede).
        self.error_status: Optional[int] = None
        if restore:
            self.restore()

    # --- Estado derivado ---

    @property
    def user(self) -> Optional[UserProfile]:
        return self.session.user if self.session else None

    @property
    def token(self) -> Optional[str]:
        return self.session.token if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def is_admin(self) -> bool:
        return self.session is not None and self.session.user.is_admin

    def auth_headers(self) -> Dict[str, str]:
        """Cabeçalho Authorization para chamadas autenticadas."""
        if not self.session:
            return {}
        return {'Authorization': f'Bearer {self.session.token}'}

    # --- Ciclo de vida ---

    def restore(self):
        """
        Verificação de inicialização: se houver token salvo, busca o perfil com ele.
        Qualquer falha descarta o token e segue sem autenticação.
        """
        token = self.storage.get_item(self.STORAGE_KEY)
        if not token:
            return

        try:
            perfil = self.api.buscar_perfil(token)
            self.session = Session(user=UserProfile.from_api(perfil), token=token)
        except Exception as e:
            logger.info("Token salvo rejeitado, sessão descartada: %s", e)
            self.session = None
            self.storage.remove_item(self.STORAGE_KEY)

    def _start(self, data: Mapping[str, Any]):
        session = _session_from_response(data)
        self.storage.set_item(self.STORAGE_KEY, session.token)
        self.session = session

    def login(self, email: str, password: str) -> bool:
        """Autentica na API. Em caso de falha a sessão anterior é mantida."""
        self.error = None
        self.error_status = None
        try:
            self._start(self.api.login(email, password))
        except ApiError as e:
            self.error = e.detail or LOGIN_FALHOU
            self.error_status = e.status_code
            logger.info("Login recusado para %s: %s", email, self.error)
            return False
        return True

    def register(self, name: str, email: str, password: str) -> bool:
        """Cria a conta na API e já inicia a sessão."""
        self.error = None
        self.error_status = None
        try:
            self._start(self.api.registrar(name, email, password))
        except ApiError as e:
            self.error = e.detail or CADASTRO_FALHOU
            self.error_status = e.status_code
            logger.info("Cadastro recusado para %s: %s", email, self.error)
            return False
        return True

    def logout(self):
        """Encerra a sessão localmente (não chama a API)."""
        self.session = None
        self.storage.remove_item(self.STORAGE_KEY)

    def clear_error(self):
        self.error = None
        self.error_status = None
