"""Build-completion hooks"""

import importlib
import logging
from typing import Callable

from mdsite.core.models import BuildResult
from mdsite.errors import HookError


logger = logging.getLogger(__name__)

Hook = Callable[[BuildResult], None]


def log_document_count(result: BuildResult) -> None:
    """Default hook: log the number of built documents."""
    logger.info("allDocuments %d", len(result.all_documents))


def load_hook(spec: str) -> Hook:
    """Resolve a 'package.module:function' string to a callable."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid hook '{spec}': expected 'module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Invalid hook '{spec}': {e}") from e
    hook = getattr(module, attr, None)
    if not callable(hook):
        raise ValueError(f"Invalid hook '{spec}': {attr} is not a callable in {module_name}")
    return hook


def run_hook(hook: Hook | None, result: BuildResult) -> None:
    """Invoke the hook once; any exception is re-raised as HookError."""
    if hook is None:
        return
    try:
        hook(result)
    except Exception as e:
        raise HookError(f"{type(e).__name__}: {e}") from e
