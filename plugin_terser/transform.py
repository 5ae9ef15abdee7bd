"""Minifier transform handed to the bundler pipeline.

Minification is delegated to the ``terser`` executable; this module only
serialises the resolved options and pipes code through it.
"""

import asyncio
import copy
import json
import os
import shutil
import subprocess
import tempfile
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from .errors import MinifierError


class TerserTransform:
    """Output transform that minifies rendered chunks with terser."""

    name = "terser"

    def __init__(self, config: Mapping[str, Any], binary: Optional[str] = None):
        """Initialize transform.

        Args:
            config: Terser options (``compress``, ``mangle``, ``ecma``, ...)
            binary: Path to the terser executable. Falls back to the
                ``TERSER_BIN`` environment variable, then ``terser`` on PATH.
        """
        self.config: Dict[str, Any] = copy.deepcopy(dict(config))
        self.binary = binary or os.environ.get("TERSER_BIN") or "terser"

    def __repr__(self) -> str:
        return f"TerserTransform(config={self.config!r})"

    def command(self, config_file: str) -> List[str]:
        executable = shutil.which(self.binary) or self.binary
        return [executable, "--config-file", config_file]

    def render_chunk(self, code: str) -> str:
        """Minify ``code``.

        Args:
            code: JavaScript source

        Returns:
            Minified source

        Raises:
            MinifierError: If terser is missing or fails
        """
        fd, config_file = tempfile.mkstemp(prefix="terser-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.config, f)

            args = self.command(config_file)
            logger.debug(f"Running {' '.join(args)}")

            try:
                proc = subprocess.run(
                    args,
                    input=code,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    check=False,
                )
            except OSError as e:
                raise MinifierError(
                    f"Could not run terser executable '{self.binary}': {e}",
                    plugin_name=self.name,
                    cause=e,
                )
        finally:
            os.unlink(config_file)

        if proc.returncode != 0:
            raise MinifierError(
                f"terser exited with code {proc.returncode}: {proc.stderr.strip()}",
                returncode=proc.returncode,
                stderr=proc.stderr,
                plugin_name=self.name,
            )

        return proc.stdout

    async def render_chunk_async(self, code: str) -> str:
        """Run ``render_chunk`` in a worker thread."""
        return await asyncio.to_thread(self.render_chunk, code)


def terser(config: Mapping[str, Any], binary: Optional[str] = None) -> TerserTransform:
    """Create a terser transform for ``config``."""
    return TerserTransform(config, binary=binary)
