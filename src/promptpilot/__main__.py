"""Entry point: python -m promptpilot [command]

- No args / "menu": Interactive prompt menu
- "list", "show", "copy", "add", "delete": one-shot commands
- "export", "import": markdown round-trip
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys
from pathlib import Path

from promptpilot.clipboard import copy_to_clipboard
from promptpilot.config import PromptPilotConfig, load_config
from promptpilot.connectors.cli import PromptMenu, sort_prompts
from promptpilot.store import Prompt, PromptStore, Scope
from promptpilot.store.models import clean_instruction, validate_instruction, validate_short_name
from promptpilot.workspace import ProjectContext

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_store(config: PromptPilotConfig) -> PromptStore:
    project = ProjectContext(root=config.workspace, dir_name=config.project_dir_name)
    return PromptStore(config.global_dir, project=project, file_name=config.file_name)


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _cmd_list(store: PromptStore, args: argparse.Namespace) -> int:
    for prompt in sort_prompts(store.merged_view()):
        print(f"{prompt.short_name}\t{prompt.scope.value}")
    return 0


def _cmd_show(store: PromptStore, args: argparse.Namespace) -> int:
    prompt = store.find_by_name(args.name)
    if prompt is None:
        return _fail(f'Prompt "{args.name}" not found.')
    print(prompt.instruction)
    return 0


def _cmd_copy(store: PromptStore, args: argparse.Namespace) -> int:
    prompt = store.find_by_name(args.name)
    if prompt is None:
        return _fail(f'Prompt "{args.name}" not found.')
    if not copy_to_clipboard(prompt.instruction, args.config.clipboard_command):
        return _fail("No clipboard available.")
    print(f'Prompt "{args.name}" copied to clipboard.')
    return 0


def _cmd_add(store: PromptStore, args: argparse.Namespace) -> int:
    instruction = sys.stdin.read()
    error = validate_short_name(args.name) or validate_instruction(instruction)
    if error:
        return _fail(error)
    scope = Scope.PROJECT if args.project else Scope.GLOBAL
    prompt = Prompt(
        short_name=args.name.strip(),
        instruction=clean_instruction(instruction),
        scope=scope,
    )
    result = store.insert_or_update(prompt)
    if not result.ok:
        return _fail(result.error or result.status.value)
    print(f'Prompt "{args.name.strip()}" saved successfully.')
    return 0


def _cmd_delete(store: PromptStore, args: argparse.Namespace) -> int:
    if not store.delete(args.name):
        return _fail(f'Failed to delete prompt "{args.name}".')
    print(f'Prompt "{args.name}" deleted successfully.')
    return 0


def _cmd_export(store: PromptStore, args: argparse.Namespace) -> int:
    from promptpilot.store.markdown import export_markdown

    paths = export_markdown(sort_prompts(store.merged_view()), Path(args.directory))
    print(f"Exported {len(paths)} prompt(s) to {args.directory}")
    return 0


def _cmd_import(store: PromptStore, args: argparse.Namespace) -> int:
    from promptpilot.store.markdown import import_markdown

    default_scope = Scope.PROJECT if args.project else Scope.GLOBAL
    results = import_markdown(store, [Path(f) for f in args.files], default_scope)
    failed = 0
    for path, result in results:
        if result.ok:
            print(f"{path}: imported {result.prompt.short_name}")
        else:
            failed += 1
            print(f"{path}: {result.error or result.status.value}", file=sys.stderr)
    return 1 if failed else 0


def _cmd_menu(store: PromptStore, args: argparse.Namespace) -> int:
    copy = functools.partial(copy_to_clipboard, command=args.config.clipboard_command)
    try:
        PromptMenu(store, copy=copy).run()
    except KeyboardInterrupt:
        pass
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promptpilot", description="Manage reusable prompts.")
    parser.add_argument("--workspace", help="project folder for project-specific prompts")
    parser.add_argument("--config", dest="config_path", help="path to promptpilot.toml")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("menu", help="interactive menu (default)").set_defaults(func=_cmd_menu)
    sub.add_parser("list", help="list all prompts").set_defaults(func=_cmd_list)

    for name, func, help_text in [
        ("show", _cmd_show, "print a prompt's instruction"),
        ("copy", _cmd_copy, "copy a prompt's instruction to the clipboard"),
        ("delete", _cmd_delete, "delete a prompt"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("name")
        p.set_defaults(func=func)

    p = sub.add_parser("add", help="add a prompt, instruction read from stdin")
    p.add_argument("name")
    p.add_argument("--project", action="store_true", help="save as project-specific")
    p.set_defaults(func=_cmd_add)

    p = sub.add_parser("export", help="write prompts as markdown files")
    p.add_argument("directory")
    p.set_defaults(func=_cmd_export)

    p = sub.add_parser("import", help="read prompts from markdown files")
    p.add_argument("files", nargs="+")
    p.add_argument("--project", action="store_true", help="default scope is project-specific")
    p.set_defaults(func=_cmd_import)

    parser.set_defaults(func=_cmd_menu)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = load_config(Path(args.config_path) if args.config_path else None)
    if args.workspace:
        config.workspace = Path(args.workspace).expanduser()
    _setup_logging(config.log_level)
    args.config = config

    store = build_store(config)
    logger.debug("Global prompts: %s, project prompts: %s", store.global_path, store.project_path)
    return args.func(store, args)


if __name__ == "__main__":
    sys.exit(main())
