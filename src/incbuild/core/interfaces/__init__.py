from .cache import ContentCacheProtocol
from .fs import EntryDiscoveryProtocol, PathResolverProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .templating import TemplateEngineProtocol
from .text import TextPostProcessorProtocol

__all__ = [
    'ContentCacheProtocol',
    'EntryDiscoveryProtocol',
    'PathResolverProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'TemplateEngineProtocol',
    'TextPostProcessorProtocol',
]
