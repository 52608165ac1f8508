"""Static catalog of known model aliases.

Maps the user-facing ``api_name`` of a language model to the exact version
string the provider API expects and to the backend family that talks to it.
Adding a provider model means adding one row to ``MODEL_ALIASES``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class AIBackend(str, Enum):
    """Provider integration family."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class ModelAlias:
    """Catalog row for a canonical alias."""
    version: str
    backend: AIBackend


MODEL_ALIASES: Dict[str, ModelAlias] = {
    # Best aliases always point at the latest known version of the family
    "gpt-best": ModelAlias("gpt-4o-2024-05-13", AIBackend.OPENAI),
    "claude-best": ModelAlias("claude-3-5-sonnet-20240620", AIBackend.ANTHROPIC),
    # OpenAI
    "gpt-4o": ModelAlias("gpt-4o", AIBackend.OPENAI),
    "gpt-4o-2024-05-13": ModelAlias("gpt-4o-2024-05-13", AIBackend.OPENAI),
    "gpt-4-turbo": ModelAlias("gpt-4-turbo", AIBackend.OPENAI),
    "gpt-3.5-turbo": ModelAlias("gpt-3.5-turbo", AIBackend.OPENAI),
    "gpt-3.5-turbo-0125": ModelAlias("gpt-3.5-turbo-0125", AIBackend.OPENAI),
    # Anthropic
    "claude-3-5-sonnet-20240620": ModelAlias("claude-3-5-sonnet-20240620", AIBackend.ANTHROPIC),
    "claude-3-opus-20240229": ModelAlias("claude-3-opus-20240229", AIBackend.ANTHROPIC),
    "claude-3-sonnet-20240229": ModelAlias("claude-3-sonnet-20240229", AIBackend.ANTHROPIC),
    "claude-3-haiku-20240307": ModelAlias("claude-3-haiku-20240307", AIBackend.ANTHROPIC),
}

BEST_ALIASES: Dict[AIBackend, str] = {
    AIBackend.OPENAI: "gpt-best",
    AIBackend.ANTHROPIC: "claude-best",
}

# Used only for names missing from MODEL_ALIASES
FAMILY_PREFIXES: Tuple[Tuple[str, AIBackend], ...] = (
    ("claude", AIBackend.ANTHROPIC),
    ("gpt", AIBackend.OPENAI),
    ("o1", AIBackend.OPENAI),
)


def is_best_alias(api_name: Optional[str]) -> bool:
    """Whether ``api_name`` is one of the best aliases."""
    return api_name in BEST_ALIASES.values()


def family_of(api_name: Optional[str]) -> Optional[AIBackend]:
    """Backend family of a name, from the catalog or its prefix."""
    if not api_name:
        return None
    alias = MODEL_ALIASES.get(api_name)
    if alias:
        return alias.backend
    lowered = api_name.lower()
    for prefix, backend in FAMILY_PREFIXES:
        if lowered.startswith(prefix):
            return backend
    return None


def resolve_provider_name(api_name: Optional[str], best: bool = False) -> Optional[str]:
    """Resolve the version string the provider API expects.

    Args:
        api_name: Alias or literal model name as stored on the entry.
        best: Resolve to the latest version of the alias's family instead.

    Returns:
        The catalog version for known aliases, the best version of the family
        when ``best`` is set, otherwise ``api_name`` unchanged.
    """
    if best:
        backend = family_of(api_name)
        if backend is not None:
            return MODEL_ALIASES[BEST_ALIASES[backend]].version

    alias = MODEL_ALIASES.get(api_name) if api_name else None
    if alias:
        return alias.version
    return api_name


def resolve_ai_backend(api_name: Optional[str], driver: Optional[str] = None) -> AIBackend:
    """Select the backend family that handles a model.

    The catalog wins; otherwise the API service driver decides, and
    OpenAI-compatible is the default.

    Args:
        api_name: Alias or literal model name.
        driver: Driver of the API service the entry points to, if any.
    """
    alias = MODEL_ALIASES.get(api_name) if api_name else None
    if alias:
        return alias.backend
    if driver:
        return AIBackend(driver)
    return AIBackend.OPENAI
