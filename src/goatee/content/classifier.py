"""Heuristic language classification for syntax highlighting.

An ordered chain of cheap checks over the filename and the first bytes of
the content; the first tag the registry knows wins.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable

from goatee.config import LanguageConfig, get_settings
from goatee.registry import LanguageRegistry, PygmentsLanguages

log = logging.getLogger(__name__)

SHELL_TAG = "sh"


class LanguageClassifier:
    """Maps ``(filename, sample)`` to a language tag. Never raises."""

    def __init__(
        self,
        registry: LanguageRegistry | None = None,
        config: LanguageConfig | None = None,
    ):
        self.registry = registry or PygmentsLanguages()
        self.config = config or get_settings().language

    def _first_known(self, tags: Iterable[str]) -> str:
        for tag in tags:
            if self.registry.is_known(tag):
                return tag
        return ""

    def classify(self, filename: str, sample: bytes) -> str:
        try:
            tag = self._classify(filename, sample)
        except Exception:
            log.exception("Language classification failed for %s", filename)
            return ""
        log.debug("Classified %s as %r", filename or "<unnamed>", tag)
        return tag

    def _classify(self, filename: str, sample: bytes) -> str:
        basename = posixpath.basename(filename)
        ext = posixpath.splitext(basename)[1][1:]

        # 1. extension
        if ext and self.registry.is_known(ext):
            return ext

        # 2. runcom files: .bashrc, .zshrc, vimrc ...
        if basename.endswith("rc") and self.registry.is_known(SHELL_TAG):
            return SHELL_TAG

        head = sample[: self.config.sample_bytes].split(b"\n", 1)[0]
        tokens = head.decode("utf-8", errors="replace").split()
        if tokens:
            # 3. "#!/usr/bin/env python3"
            if self.registry.is_known(tokens[-1]):
                return tokens[-1]

            # 4. "#!/bin/bash"
            interpreter = posixpath.basename(tokens[0])
            if self.registry.is_known(interpreter):
                return interpreter

            # 5. "<?xml version=..."
            hint = tokens[0].lstrip("<?#")
            if self.registry.is_known(hint):
                return hint

        # 6. comment and section markers
        tag = self._scan_lines(sample)
        if tag:
            return tag
        if ext in ("conf", "cfg") and self.registry.is_known("ini"):
            return "ini"

        # 7. registry's own filename patterns
        tag = self.registry.guess_by_filename(basename)
        if tag:
            return tag

        # 8. always give the buffer some highlighting
        if self.registry.is_known(self.config.fallback):
            return self.config.fallback
        return ""

    def _scan_lines(self, sample: bytes) -> str:
        for line in sample.splitlines():
            if not line:
                continue
            if line.startswith(b"#"):
                tag = self._first_known(self.config.comment_order)
                if tag:
                    return tag
            if line.startswith((b";", b"[")):
                tag = self._first_known(self.config.section_order)
                if tag:
                    return tag
        return ""
