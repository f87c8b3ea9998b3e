"""
Adaptadores de armazenamento local (porta ILocalStorage).

Em produção o "armazenamento local" do visitante é a sessão do Django
(por padrão em cookie assinado, ou seja, guardada no próprio navegador).
"""
from typing import Dict, Optional

from vitrine.core.ports import ILocalStorage


class SessionStorage(ILocalStorage):
    """Guarda as chaves do Core dentro da sessão do Django, sob um prefixo próprio."""

    PREFIX = 'vitrine:'

    def __init__(self, session):
        self.session = session

    def get_item(self, key: str) -> Optional[str]:
        return self.session.get(self.PREFIX + key)

    def set_item(self, key: str, value: str) -> None:
        self.session[self.PREFIX + key] = value
        self.session.modified = True

    def remove_item(self, key: str) -> None:
        if self.PREFIX + key in self.session:
            del self.session[self.PREFIX + key]
            self.session.modified = True


class MemoryStorage(ILocalStorage):
    """Armazenamento em memória (testes e uso fora de uma requisição)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)
