"""Markdown import/export: one .md file per prompt with YAML frontmatter.

    ---
    scope: Global
    shortName: Review PR
    ---

    Review this diff for correctness and style...
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

import frontmatter

from promptpilot.store.models import (
    MAX_SHORT_NAME_LENGTH,
    Prompt,
    SaveResult,
    Scope,
    clean_instruction,
    validate_instruction,
    validate_short_name,
)

if TYPE_CHECKING:
    from promptpilot.store.store import PromptStore

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    """Minimal slug: strip illegal chars, spaces to hyphens."""
    slug = re.sub(r'[<>:"/\\|?*\n\r\t]', "", name)
    slug = slug.strip().replace(" ", "-")
    return slug or "unnamed"


def _unique_path(directory: Path, slug: str) -> Path:
    path = directory / f"{slug}.md"
    counter = 2
    while path.exists():
        path = directory / f"{slug}-{counter}.md"
        counter += 1
    return path


def export_markdown(prompts: Iterable[Prompt], directory: Path) -> list[Path]:
    """Write each prompt to its own markdown file. Returns the paths written."""
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for prompt in prompts:
        post = frontmatter.Post(
            prompt.instruction,
            shortName=prompt.short_name,
            scope=prompt.scope.value,
        )
        path = _unique_path(directory, _slugify(prompt.short_name))
        path.write_text(frontmatter.dumps(post) + "\n", encoding="utf-8")
        written.append(path)
    logger.info("Exported %d prompt(s) to %s", len(written), directory)
    return written


def _parse_scope(raw: object, default: Scope) -> Scope:
    if raw is None:
        return default
    try:
        return Scope(str(raw))
    except ValueError:
        logger.warning("Unknown scope %r, using %s", raw, default.value)
        return default


def import_markdown(
    store: PromptStore,
    paths: Iterable[Path],
    default_scope: Scope = Scope.GLOBAL,
) -> list[tuple[Path, SaveResult]]:
    """Insert prompts read from markdown files.

    Existing names are reported as DUPLICATE_NAME, never overwritten. Files
    that cannot be parsed or have an empty body are skipped.
    """
    results: list[tuple[Path, SaveResult]] = []
    for path in paths:
        try:
            post = frontmatter.load(str(path))
        except Exception as e:
            logger.warning("Skipping %s: %s", path, e)
            continue

        body = clean_instruction(post.content)
        if validate_instruction(body):
            logger.warning("Skipping %s: empty instruction", path)
            continue

        raw_name = post.metadata.get("shortName")
        if raw_name is None:
            name = path.stem[:MAX_SHORT_NAME_LENGTH].strip()
        else:
            name = str(raw_name).strip()
        error = validate_short_name(name)
        if error:
            logger.warning("Skipping %s: %s", path, error)
            continue

        prompt = Prompt(
            short_name=name,
            instruction=body,
            scope=_parse_scope(post.metadata.get("scope"), default_scope),
        )
        results.append((path, store.insert_or_update(prompt)))
    return results
