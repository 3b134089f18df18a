from .naver_search import NaverSearchClient
from .proxy_pac import ProxyController
from .virtual_contact import generate_virtual_contact

__all__ = ['NaverSearchClient', 'ProxyController', 'generate_virtual_contact']
