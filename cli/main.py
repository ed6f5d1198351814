#!/usr/bin/env python3
"""
In-depth Interviewer CLI

Operational commands for the interviewer backend.

1) serve
   - Start the HTTP API (FastAPI via uvicorn) on one or more ports:
       HOST / API_PORTS (default: PORT and 8001)

2) sessions
   - list            saved sessions, newest first
   - show ID         print a saved session document
   - delete ID       remove a saved session file

3) config
   - show            print the effective interview config
   - export PATH     write the effective config to PATH
   - import PATH     replace the stored config with the JSON at PATH
   - reset           restore the stored config to the defaults

Saved sessions and the stored config live under INTERVIEWER_DATA_DIR
(default: data/).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pydantic import ValidationError

from configs.settings import settings
from runtime.store.config_store import ConfigStore
from runtime.store.export_store import SessionExportStore


def _print_json(data: Dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _write_json(data: Dict, out_path: str) -> None:
    """Write JSON to a file with UTF-8 encoding and pretty formatting."""
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def _config_store(data_dir: str) -> ConfigStore:
    return ConfigStore(
        config_path=os.path.join(data_dir, "config.json"),
        defaults_path=str(settings.default_config_path),
    )


def _export_store(data_dir: str) -> SessionExportStore:
    return SessionExportStore(data_dir=data_dir)


# ---------------------------------------------------------------------------
# serve – HTTP API on one or more ports
# ---------------------------------------------------------------------------


async def _serve_all(host: str, ports: List[int], log_level: str, reload: bool) -> None:
    import uvicorn

    servers = [
        uvicorn.Server(
            uvicorn.Config(
                "runtime.api.server:app",
                host=host,
                port=port,
                log_level=log_level,
                reload=reload,
            )
        )
        for port in ports
    ]
    await asyncio.gather(*(server.serve() for server in servers))


def cmd_serve(host: str, ports: List[int], log_level: str, reload: bool) -> None:
    """
    Start the API server. With several ports, one uvicorn server per port
    runs in the same event loop (and the same app instance).
    """
    if reload and len(ports) > 1:
        print("[Interviewer] --reload supports a single port; using the first one")
        ports = ports[:1]

    if settings.has_openai_api_key:
        print(f"[Interviewer] AI enabled (model={settings.openai_model})")
    else:
        print("[Interviewer] OPENAI_API_KEY not set; fallback questions and analysis will be used")

    for port in ports:
        print(f"[Interviewer] Listening on http://{host}:{port}")

    if reload:
        import uvicorn

        uvicorn.run(
            "runtime.api.server:app",
            host=host,
            port=ports[0],
            log_level=log_level,
            reload=True,
        )
        return

    asyncio.run(_serve_all(host=host, ports=ports, log_level=log_level, reload=False))


# ---------------------------------------------------------------------------
# sessions – saved interview sessions
# ---------------------------------------------------------------------------


def cmd_sessions_list(data_dir: str) -> None:
    sessions = _export_store(data_dir).list_sessions()
    if not sessions:
        print("[Interviewer] No saved sessions")
        return

    print(f"[Interviewer] {len(sessions)} saved session(s):")
    for item in sessions:
        print(
            f"  {item['id']}  {item['created_at']}  "
            f"questions={item['total_questions']} insights={item['total_insights']}  "
            f"{item['topic']}"
        )


def cmd_sessions_show(data_dir: str, session_id: str) -> int:
    data = _export_store(data_dir).get(session_id)
    if data is None:
        print(f"[Interviewer] Session not found: {session_id}", file=sys.stderr)
        return 1
    _print_json(data)
    return 0


def cmd_sessions_delete(data_dir: str, session_id: str) -> int:
    if not _export_store(data_dir).delete(session_id):
        print(f"[Interviewer] Session not found: {session_id}", file=sys.stderr)
        return 1
    print(f"[Interviewer] ✓ Deleted session {session_id}")
    return 0


# ---------------------------------------------------------------------------
# config – interview configuration
# ---------------------------------------------------------------------------


def cmd_config_show(data_dir: str) -> None:
    _print_json(_config_store(data_dir).load().model_dump())


def cmd_config_export(data_dir: str, out_path: str) -> None:
    _write_json(_config_store(data_dir).load().model_dump(), out_path)
    print(f"[Interviewer] ✓ Config exported → {out_path}")


def cmd_config_import(data_dir: str, src_path: str) -> int:
    if not os.path.isfile(src_path):
        raise FileNotFoundError(f"Config file not found: {src_path}")

    with open(src_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        print("[Interviewer] Config file must contain a JSON object", file=sys.stderr)
        return 1

    try:
        _config_store(data_dir).import_config(data)
    except ValidationError as e:
        print(f"[Interviewer] Invalid config: {e}", file=sys.stderr)
        return 1

    print(f"[Interviewer] ✓ Config imported from {src_path}")
    return 0


def cmd_config_reset(data_dir: str) -> None:
    _config_store(data_dir).reset()
    print("[Interviewer] ✓ Config reset to defaults")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-depth Interviewer CLI")
    parser.add_argument(
        "--data-dir",
        default=str(settings.data_dir),
        help="Data directory for saved sessions and config.json (default: INTERVIEWER_DATA_DIR or 'data')",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Start the HTTP API server")
    p_serve.add_argument(
        "--host",
        default=settings.host,
        help="Bind address (default: HOST or 0.0.0.0)",
    )
    p_serve.add_argument(
        "--port",
        dest="ports",
        type=int,
        action="append",
        help="Port to listen on; repeat for several (default: API_PORTS or PORT,8001)",
    )
    p_serve.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level",
    )
    p_serve.add_argument(
        "--reload",
        action="store_true",
        help="Auto-reload on code changes (single port only)",
    )

    # sessions
    p_sessions = subparsers.add_parser("sessions", help="Manage saved sessions")
    sessions_sub = p_sessions.add_subparsers(dest="sessions_command", required=True)
    sessions_sub.add_parser("list", help="List saved sessions")
    p_show = sessions_sub.add_parser("show", help="Print a saved session")
    p_show.add_argument("session_id", help="Session id")
    p_delete = sessions_sub.add_parser("delete", help="Delete a saved session")
    p_delete.add_argument("session_id", help="Session id")

    # config
    p_config = subparsers.add_parser("config", help="Manage the interview config")
    config_sub = p_config.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Print the effective config")
    p_export = config_sub.add_parser("export", help="Write the effective config to a file")
    p_export.add_argument("path", help="Output JSON path")
    p_import = config_sub.add_parser("import", help="Replace the stored config from a file")
    p_import.add_argument("path", help="Input JSON path")
    config_sub.add_parser("reset", help="Restore the stored config to the defaults")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    data_dir: str = args.data_dir
    command: str = args.command

    if command == "serve":
        cmd_serve(
            host=args.host,
            ports=args.ports or settings.api_ports,
            log_level=args.log_level,
            reload=args.reload,
        )
    elif command == "sessions":
        if args.sessions_command == "list":
            cmd_sessions_list(data_dir=data_dir)
        elif args.sessions_command == "show":
            return cmd_sessions_show(data_dir=data_dir, session_id=args.session_id)
        elif args.sessions_command == "delete":
            return cmd_sessions_delete(data_dir=data_dir, session_id=args.session_id)
    elif command == "config":
        if args.config_command == "show":
            cmd_config_show(data_dir=data_dir)
        elif args.config_command == "export":
            cmd_config_export(data_dir=data_dir, out_path=args.path)
        elif args.config_command == "import":
            return cmd_config_import(data_dir=data_dir, src_path=args.path)
        elif args.config_command == "reset":
            cmd_config_reset(data_dir=data_dir)
    else:
        parser.error(f"Unknown command: {command}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
