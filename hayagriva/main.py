from dotenv import load_dotenv
load_dotenv()

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, get_args

from hayagriva.config import DEFAULT_CONFIG_FILE, GeneratorConfig, load_config
from hayagriva.core.emitter import MIME_TYPES
from hayagriva.core.errors import ConfigError, TranscriptError
from hayagriva.core.protocol import ChatMessage, CssFramework, Framework
from hayagriva.core.widget import lookup_response
from hayagriva.orchestrator.orchestrator import Orchestrator, OrchestratorConfig
from hayagriva.project_state.state_store import ProjectStateStore
from hayagriva.utils.logger import get_logger, set_log_level


def _timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an ISO timestamp: {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="YAML config file (default: hayagriva.yaml in the project dir or cwd).")
    common.add_argument(
        "--project-dir",
        type=str,
        default=".",
        help="Root directory for this project run (default: current directory).",
    )
    parser = argparse.ArgumentParser(
        prog="hayagriva",
        description="Hayagriva: turn an app description into a React source bundle.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Generate an app bundle from a prompt.")
    gen.add_argument(
        "--prompt",
        type=str,
        required=True,
        help="App description, e.g. 'Build a dashboard app with dark mode and authentication'.",
    )
    gen.add_argument("--out-dir", type=str, default=None, help="Where to write the bundle.")
    gen.add_argument("--framework", choices=get_args(Framework), default=None)
    gen.add_argument("--css-framework", choices=get_args(CssFramework), default=None)
    gen.add_argument("--extension", choices=tuple(MIME_TYPES), default=None, help="Bundle file extension.")
    gen.add_argument("--default-name", type=str, default=None, help="App name used when none can be derived.")
    gen.add_argument("--no-responsive", action="store_true", help="Omit the responsive media-query block.")
    gen.add_argument("--no-accessibility", action="store_true", help="Omit skip links and ARIA attributes.")
    gen.add_argument("--timestamp", type=_timestamp, default=None, help="Fix the generation time (ISO 8601).")

    widget = sub.add_parser("widget", parents=[common], help="Package a chat transcript as an embeddable chatbot.")
    widget.add_argument("--transcript", type=str, required=True, help="JSON list of {role, content} messages.")
    widget.add_argument("--name", type=str, default=None, help="Bot name (default from config).")
    widget.add_argument("--out-dir", type=str, default=None)
    widget.add_argument("--timestamp", type=_timestamp, default=None)
    widget.add_argument("--ask", type=str, default=None, help="Print the reply the widget would give, then exit.")

    history = sub.add_parser("history", parents=[common], help="List or prune past generations.")
    history.add_argument("--delete", type=str, default=None, metavar="ID", help="Remove one history entry.")
    return parser


def load_transcript(path: Path) -> List[ChatMessage]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise TranscriptError(f"Transcript not found: {path}") from e
    except json.JSONDecodeError as e:
        raise TranscriptError(f"Transcript {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TranscriptError(f"Transcript {path} must be a JSON list of messages")
    messages: List[ChatMessage] = []
    for i, item in enumerate(data):
        if not (isinstance(item, dict) and isinstance(item.get("role"), str) and isinstance(item.get("content"), str)):
            raise TranscriptError(f"Transcript entry {i} must be an object with string 'role' and 'content'")
        messages.append(ChatMessage(role=item["role"], content=item["content"]))
    return messages


def _generator_config(args: argparse.Namespace, project_root: Path) -> GeneratorConfig:
    config_path = args.config
    if config_path is None and (project_root / DEFAULT_CONFIG_FILE).exists():
        config_path = project_root / DEFAULT_CONFIG_FILE
    cfg = load_config(config_path)
    if args.command == "generate":
        cfg = cfg.with_overrides(
            output_dir=args.out_dir,
            framework=args.framework,
            css_framework=args.css_framework,
            bundle_extension=args.extension,
            default_app_name=args.default_name,
            responsive=False if args.no_responsive else None,
            accessibility=False if args.no_accessibility else None,
        )
    elif args.command == "widget":
        cfg = cfg.with_overrides(output_dir=args.out_dir, widget_name=args.name)
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger("main")
    project_root = Path(args.project_dir).resolve()

    try:
        cfg = _generator_config(args, project_root)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    set_log_level(cfg.log_level)
    get_logger("hayagriva")

    if args.command == "history":
        store = ProjectStateStore(root_dir=project_root / "project_state")
        if args.delete:
            if not store.delete(args.delete):
                logger.error("No history entry with id %s", args.delete)
                return 1
            print(f"Deleted {args.delete}")
            return 0
        records = store.history()
        if not records:
            print("No generations yet.")
        for record in records:
            s = record.summary()
            print(f"{s['id']}  {s['when']}  {s['type']:<11}  {s['name']}  {record.filename}")
            print(f"    {s['description']}")
        return 0

    logger.info("Using project root: %s", project_root)

    if args.command == "widget":
        try:
            transcript = load_transcript(Path(args.transcript))
        except TranscriptError as e:
            logger.error("%s", e)
            return 2
        if args.ask is not None:
            print(lookup_response(transcript, args.ask, name=cfg.widget_name))
            return 0
        orchestrator = Orchestrator(OrchestratorConfig(project_root=project_root, generator=cfg))
        path = orchestrator.package_widget(transcript, generated_at=args.timestamp)
        print(path)
        return 0

    orchestrator = Orchestrator(OrchestratorConfig(project_root=project_root, generator=cfg))
    state = orchestrator.run(user_prompt=args.prompt, generated_at=args.timestamp)
    logger.info("Done. %s app %s", state.requirements.app_type.value, state.requirements.app_name)
    print(state.artifact_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
