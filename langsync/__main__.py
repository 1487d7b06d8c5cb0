"""
langsync - keyboard-driven dictation language

Usage:
    python -m langsync status
    python -m langsync watch [--enable]
    python -m langsync transcribe AUDIO [--language CODE] [--model NAME]

Add --debug (or set LANGSYNC_DEBUG=1) to write a debug log to
~/.config/langsync/debug.log.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from langsync.core.config import AUTO_SWITCH_KEY, CONFIG_DIR, SELECTED_LANGUAGE_KEY
from langsync.core.language import to_canonical
from langsync.platform.macos import HAS_FOUNDATION
from langsync.service import create_macos_service
from langsync.stt.errors import NegotiationError

log = logging.getLogger("langsync")


def _configure_logging(debug):
    if debug:
        log_path = CONFIG_DIR / "debug.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(log_path),
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")


def _parser():
    parser = argparse.ArgumentParser(prog="langsync", description="Keyboard-driven dictation language.")
    parser.add_argument("--debug", action="store_true", help="write a debug log")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status", help="show keyboard and language state")

    watch = commands.add_parser("watch", help="follow keyboard changes until interrupted")
    watch.add_argument("--enable", action="store_true", help="turn keyboard auto-switch on first")

    transcribe = commands.add_parser("transcribe", help="transcribe one audio file")
    transcribe.add_argument("audio")
    transcribe.add_argument("--language", help="language code (defaults to the selected language)")
    transcribe.add_argument("--model", help="model to use (native, base, small, ...)")
    return parser


def command_status(service):
    service.watcher.refresh()
    keyboard = service.watcher.current_language
    mapped = to_canonical(keyboard)
    supported = "supported" if service.catalog.is_supported(mapped) else "not supported"
    print(f"Keyboard:          {service.watcher.current_display_name or 'unknown'} ({keyboard or '?'})")
    print(f"Keyboard language: {mapped} ({supported} by {service.registry.active_model.display_name})")
    print(f"Selected language: {service.settings.get(SELECTED_LANGUAGE_KEY)}")
    print(f"Auto-switch:       {service.policy.state.value}")
    return 0


def command_watch(service, enable=False):
    from PyObjCTools import AppHelper

    if enable:
        service.settings.set(AUTO_SWITCH_KEY, True)
    service.start()
    service.policy.sync_language_if_enabled()
    print(f"Watching keyboard changes (auto-switch {service.policy.state.value}). Ctrl+C to stop.")
    try:
        AppHelper.runConsoleEventLoop(installInterrupt=True)
    finally:
        service.stop()
    return 0


def command_transcribe(service, audio, language=None, model=None):
    if model:
        service.set_model(model)
    try:
        text = asyncio.run(service.engine.transcribe(audio, language))
    except NegotiationError as exc:
        print(f"Transcription failed: {exc}", file=sys.stderr)
        return 2
    print(text)
    return 0


def main(argv=None):
    args = _parser().parse_args(argv)
    _configure_logging(args.debug or os.environ.get("LANGSYNC_DEBUG") == "1")

    if not HAS_FOUNDATION:
        print("langsync needs macOS with PyObjC installed.", file=sys.stderr)
        return 1

    service = create_macos_service()
    if args.command == "status":
        return command_status(service)
    if args.command == "watch":
        return command_watch(service, enable=args.enable)
    try:
        return command_transcribe(service, args.audio, args.language, args.model)
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
