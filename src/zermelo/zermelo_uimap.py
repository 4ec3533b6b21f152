"""
Provides the `UserInterfaceMapper` class for managing user-defined aliases ("sugar")
in the Zermelo programming language.

Zermelo's canonical spellings are mathematical symbols (`⊆`, `∪`, `Ø`, ...).
Sugar lets a program spell them as words instead: the lexer resolves any word
that is not a keyword through the active mapper.

Classes:
    - UserInterfaceMapper: Maps user-defined alias words to canonical token types.
    - MappingError: Raised when configuration or alias conflicts occur.

Features:
    - Maps alias strings to canonical token types using `CANONICAL_TOKENS`
    - Supports both dict-mode (explicit alias-to-token mapping) and list-mode
      (positional mapping against `CANONICAL_TOKENS`)
    - Detects and reports alias conflicts
    - Loads mappings from JSON configuration files
    - Generates alias reports and session diffs

Usage:
    >>> mapper = UserInterfaceMapper.from_canonical()
    >>> mapper.configure({"join": "UNION"})
    >>> mapper.get_token("join").type
    'UNION'
"""

import json
import os
from typing import Any

from zermelo.zermelo_constants import CANONICAL_TOKEN_MAP, CANONICAL_TOKENS, token_hashmap
from zermelo.zermelo_lexer import Token, is_word_char, is_word_start

SUGAR_ENV_VAR = "ZERMELO_SUGAR"


class MappingError(Exception):
    """Custom exception for user alias mapping conflicts in Zermelo.

    Attributes:
        conflicts (list[str]): Conflicting alias descriptions.
    """

    def __init__(self, message: str, conflicts: list[str] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


class UserInterfaceMapper:
    """Manages user-defined alias-to-token mappings for the Zermelo language.

    Attributes:
        token_map (dict[str, str]): Maps alias words to canonical token types.
        alias_report (dict[str, str]): A copy of token_map for reporting.
    """

    def __init__(self) -> None:
        self.token_map: dict[str, str] = {}
        self.alias_report: dict[str, str] = {}

    def get_token(self, alias: str, line: int = 0, col: int = 0) -> Token | None:
        """Resolves an alias to a Token if it exists in the current alias map.

        Returns:
            A `Token` with the resolved type if the alias exists, else `None`.
        """
        sym = self.token_map.get(alias)
        return Token(sym, alias, line, col) if sym else None

    def report(self, verbose: bool = False) -> str:
        """Generates a formatted string report of the current alias mappings.

        Args:
            verbose: If True, includes token slot index information for each mapping.
        """
        lines: list[str] = []
        for alias, sym in sorted(self.alias_report.items()):
            if verbose:
                idx = CANONICAL_TOKENS.index(sym)
                lines.append(f"{alias:>12} → {sym:<16} (slot {idx})")
            else:
                lines.append(f"{alias:>12} → {sym}")
        return "\n".join(lines)

    def _extract_aliases(self, entry: Any) -> list[str]:
        """Recursively extracts alias strings from a flexible configuration entry.

        Supports strings, iterables, and dicts (keys are taken as aliases).
        """
        if entry is None:
            return []
        if isinstance(entry, str):
            return [entry]
        if isinstance(entry, (list, tuple, set)):
            aliases: list[str] = []
            for item in entry:
                aliases.extend(self._extract_aliases(item))
            return aliases
        if isinstance(entry, dict):
            return [str(k) for k in entry.keys()]
        return []

    @staticmethod
    def _check_alias(alias: str) -> None:
        # The lexer only resolves whole words, and keywords win over aliases
        if not is_word_start(alias[:1]) or not all(is_word_char(ch) for ch in alias):
            raise MappingError(f"Alias must be a word: {alias!r}")
        if alias in token_hashmap:
            raise MappingError(f"Alias shadows a keyword: {alias!r}")

    @classmethod
    def from_canonical(cls) -> "UserInterfaceMapper":
        """Constructs a `UserInterfaceMapper` preloaded with `CANONICAL_TOKEN_MAP`."""
        instance = cls()
        instance.configure(dict(CANONICAL_TOKEN_MAP))
        return instance

    @classmethod
    def from_env(cls) -> "UserInterfaceMapper":
        """Canonical mapper, extended by the JSON file named in `ZERMELO_SUGAR` if set."""
        instance = cls.from_canonical()
        path = os.getenv(SUGAR_ENV_VAR)
        if path:
            instance.load_from_json(path)
        return instance

    def load_from_json(self, path: str) -> None:
        """
        Loads alias-to-token mappings from a JSON file and applies them via `configure`.

        Each key is a string of comma-separated aliases and each value is a
        canonical token type:

            {
                "join,cup": "UNION",
                "meet,cap": "INTERSECTION"
            }

        Raises:
            MappingError: If the file cannot be loaded or the configuration is invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)

            parsed_cfg: dict[tuple[Any, ...], str] = {}
            for key, value in raw_cfg.items():
                aliases = [alias.strip() for alias in key.split(",")]
                parsed_cfg[tuple(aliases)] = value

            self.configure(parsed_cfg)

        except MappingError:
            raise
        except (OSError, ValueError, AttributeError) as e:
            raise MappingError(f"Failed to load sugar file: {e}") from e

    def configure(self, cfg: list[Any] | dict[Any, Any]) -> None:
        """
        Applies a new alias-to-token configuration to the mapper.

        Supports two modes:
        - Dict mode: maps alias groups (str, list, tuple, set) to a canonical token.
        - List mode: positional alias groups aligned to `CANONICAL_TOKENS` by index.

        The configuration is applied atomically: nothing changes if it is rejected.

        Raises:
            MappingError: If any of the following occur:
                - A symbol is not found in `CANONICAL_TOKENS`
                - An alias is not a word or shadows a keyword
                - An alias maps to multiple conflicting symbols
                - The list-mode config exceeds the number of available canonical tokens
        """
        pairs: list[tuple[str, str]] = []
        valid_symbols = set(CANONICAL_TOKENS)

        if isinstance(cfg, dict):
            for alias_group, sym in cfg.items():
                if sym not in valid_symbols:
                    raise MappingError(f"Unknown symbolic token name: {sym}")
                pairs.extend((alias, sym) for alias in self._extract_aliases(alias_group))
        elif isinstance(cfg, list):
            if len(cfg) > len(CANONICAL_TOKENS):
                raise MappingError("Too many entries in list-mode config")
            for idx, entry in enumerate(cfg):
                sym = CANONICAL_TOKENS[idx]
                pairs.extend((alias, sym) for alias in self._extract_aliases(entry))
        else:
            raise MappingError("Configuration must be either a list or a dict")

        new_token_map: dict[str, str] = {}
        conflicts: list[str] = []
        for alias, sym in pairs:
            self._check_alias(alias)
            existing = new_token_map.get(alias, self.token_map.get(alias))
            if existing is not None and existing != sym:
                conflicts.append(f"'{alias}' → conflict between {existing} and {sym}")
            else:
                new_token_map[alias] = sym

        if conflicts:
            raise MappingError("Alias collision(s) detected", conflicts)

        self.token_map.update(new_token_map)
        self.alias_report.update(new_token_map)

    def session_diff(self) -> dict[str, str]:
        """Aliases added on top of the canonical sugar words."""
        return {
            alias: token
            for alias, token in self.token_map.items()
            if CANONICAL_TOKEN_MAP.get(alias) != token
        }
