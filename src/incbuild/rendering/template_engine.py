"""
template_engine – Banner template rendering for incbuild.

Banners use ``{{NAME}}`` placeholders. Only names present in the mapping are
replaced; any other ``{{...}}`` sequence is copied through untouched so that
banners may contain literal double braces.
"""

import logging
import re
from typing import Mapping, Optional

from incbuild.core.interfaces.templating import TemplateEngineProtocol
from incbuild.logging.helpers import get_logger

_PLACEHOLDER_RX = re.compile(r'\{\{([A-Za-z_]\w*)\}\}')


class DoubleBraceTemplateEngine(TemplateEngineProtocol):
    """Replace ``{{NAME}}`` with ``variables["NAME"]`` in a single pass."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('templates')

    def render(self, template: str, variables: Mapping[str, str]) -> str:
        if not template:
            return ''

        def _sub(m: re.Match[str]) -> str:
            name = m.group(1)
            if name in variables:
                return str(variables[name])
            return m.group(0)

        return _PLACEHOLDER_RX.sub(_sub, template)
