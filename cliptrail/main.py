"""Command-line entry point: settings, logging, single instance, then the tray app."""
from __future__ import annotations

import ctypes
import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

import click

from .settings import AppSettings, default_config_path, load_settings, save_settings, with_overrides

log = logging.getLogger(__name__)


_SINGLE_INSTANCE_MUTEX = "Local\\ClipTrail.SingleInstance"
_ERROR_ALREADY_EXISTS = 183


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr or open(os.devnull, "w")),
        ],
    )


@contextmanager
def single_instance() -> Iterator[bool]:
    """Yield False when another ClipTrail already holds the session mutex."""
    if os.name != "nt":
        yield True
        return
    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    kernel32.CreateMutexW.restype = ctypes.c_void_p
    handle = kernel32.CreateMutexW(None, False, _SINGLE_INSTANCE_MUTEX)
    if not handle:
        yield True
        return
    try:
        yield ctypes.get_last_error() != _ERROR_ALREADY_EXISTS
    finally:
        kernel32.CloseHandle(ctypes.c_void_p(handle))


def resolve_settings(config_path: str | None, **overrides: object) -> AppSettings:
    path = config_path or default_config_path()
    settings = load_settings(path)
    if not os.path.isfile(path):
        # 首次运行写出默认配置，便于手动修改
        try:
            save_settings(settings, path)
        except OSError:
            log.exception("保存默认设置失败")
    return with_overrides(settings, **overrides)


def _run_app(settings: AppSettings) -> int:
    os.environ.setdefault("QT_LOGGING_RULES", "qt.qpa.window=false")
    try:
        from .qt_app import ClipTrailApp
        from .win_pasteboard import WindowsPasteboard
    except ModuleNotFoundError as e:
        missing = getattr(e, "name", "") or ""
        if missing in ("win32con", "win32clipboard", "PySide6"):
            raise click.ClickException(
                f"依赖缺失：{missing}\n请使用当前解释器安装依赖：\n  {sys.executable} -m pip install -e ."
            ) from e
        raise
    return ClipTrailApp(settings=settings, pasteboard=WindowsPasteboard()).run()


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to config.json (default: %APPDATA%/ClipTrail/config.json)")
@click.option("--max-entries", type=click.IntRange(min=1), default=None,
              help="Number of clipboard entries to keep")
@click.option("--interval-ms", "poll_interval_ms", type=click.IntRange(min=1), default=None,
              help="Clipboard polling interval in milliseconds")
@click.option("--capture-on-start/--skip-existing", default=None,
              help="Capture the text already on the clipboard at launch")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def main(
    config_path: str | None,
    max_entries: int | None,
    poll_interval_ms: int | None,
    capture_on_start: bool | None,
    verbose: bool,
) -> None:
    """Keep a short history of copied text in the system tray."""
    configure_logging(verbose)
    settings = resolve_settings(
        config_path,
        max_entries=max_entries,
        poll_interval_ms=poll_interval_ms,
        capture_on_start=capture_on_start,
    )
    log.debug("启动设置: %s", settings)

    with single_instance() as acquired:
        if not acquired:
            click.echo("ClipTrail 已在运行中，请查看系统托盘区域的 ClipTrail 图标。", err=True)
            return
        sys.exit(_run_app(settings))
