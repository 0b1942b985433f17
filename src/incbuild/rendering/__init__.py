from .expander import IncludeExpander
from .path_resolver import IncludePathResolver
from .template_engine import DoubleBraceTemplateEngine

__all__ = ['IncludeExpander', 'IncludePathResolver', 'DoubleBraceTemplateEngine']
