"""CLI 入口

调试用的宿主驱动：对本地 HTML 文件或在线页面运行下一页识别。
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.panel import Panel
from rich.table import Table

from .common.exceptions import NextPagerError
from .common.logger import console, get_logger, setup_file_logging
from .common.types import NextPageCandidate, PaginationState
from .common.validators import is_http_url, validate_file_path, validate_url
from .dom.html_document import HtmlDocument
from .locator import PaginationLocator, PaginationStateInspector

logger = get_logger(__name__)

app = typer.Typer(
    name="nextpager",
    help="NextPager CLI - 下一页识别调试工具",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_file: str = typer.Option(None, "--log-file", help="同时把日志写入文件"),
):
    """NextPager CLI - 下一页识别调试工具"""
    if log_file:
        setup_file_logging(log_file)


async def _snapshot_url(url: str, headless: bool) -> HtmlDocument:
    from .dom.playwright_host import PlaywrightPageHost
    from .dom.session import create_browser_session

    async with create_browser_session(headless=headless) as session:
        host = PlaywrightPageHost(session.page)
        await host.navigate(url)
        return await host.snapshot()


def _load_document(source: str, headless: bool) -> HtmlDocument:
    """SOURCE 为 http(s) 地址时用浏览器打开并快照，否则按本地 HTML 文件读取"""
    if is_http_url(source):
        url = validate_url(source)
        logger.info(f"打开页面: {url}")
        return asyncio.run(_snapshot_url(url, headless))

    path = Path(validate_file_path(source))
    return HtmlDocument.from_html(path.read_text(encoding="utf-8"), url=path.as_uri())


def _build_candidates_table(candidates: list[NextPageCandidate]) -> Table:
    """构建候选预览表格"""
    table = Table(title="下一页候选（按级联顺序）")
    table.add_column("#", style="dim")
    table.add_column("type", style="cyan")
    table.add_column("confidence", style="magenta")
    table.add_column("url", style="green")
    table.add_column("text", style="yellow")
    table.add_column("load more", style="blue")

    for i, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(i),
            candidate.type.value,
            f"{candidate.confidence:.2f}",
            candidate.url or "(仅点击)",
            candidate.text[:40],
            "是" if candidate.is_load_more else "否",
        )
    return table


def _fail(exc: Exception) -> None:
    console.print(f"[red]错误:[/red] {exc}")
    raise typer.Exit(2)


@app.command("locate")
def locate_command(
    source: str = typer.Argument(..., help="本地 HTML 文件路径或 http(s) 地址"),
    show_all: bool = typer.Option(False, "--all", "-a", help="显示每个策略的候选"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    headless: bool = typer.Option(True, "--headless/--no-headless", help="是否使用无头模式"),
):
    """
    识别下一页控件

    示例:
        nextpager locate ./listing.html --all
        nextpager locate "https://example.com/list?page=1"
    """
    try:
        document = _load_document(source, headless)
    except NextPagerError as e:
        _fail(e)

    locator = PaginationLocator(document)
    if show_all:
        candidates = locator.locate_all()
    else:
        candidate = locator.locate()
        candidates = [candidate] if candidate is not None else []
    has_markup = locator.probe_infinite_scroll_markup()

    if as_json:
        payload = {
            "candidates": [c.model_dump(mode="json") for c in candidates],
            "infinite_scroll_markup": has_markup,
        }
        typer.echo(json.dumps(payload, ensure_ascii=False))
    elif candidates:
        console.print(_build_candidates_table(candidates))
        console.print(f"无限滚动标记: {'有' if has_markup else '无'}")
    else:
        console.print("[yellow]未找到下一页[/yellow]")
        console.print(f"无限滚动标记: {'有' if has_markup else '无'}")

    if not candidates:
        raise typer.Exit(1)


@app.command("inspect")
def inspect_command(
    source: str = typer.Argument(..., help="本地 HTML 文件路径或 http(s) 地址"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
    headless: bool = typer.Option(True, "--headless/--no-headless", help="是否使用无头模式"),
):
    """
    输出分页状态（当前页、总页数、上一页/下一页）

    示例:
        nextpager inspect ./listing.html --json
    """
    try:
        document = _load_document(source, headless)
    except NextPagerError as e:
        _fail(e)

    state: PaginationState = PaginationStateInspector(document).inspect()

    if as_json:
        typer.echo(state.model_dump_json())
        return

    console.print(
        Panel(
            f"[bold]当前页:[/bold] {state.current_page}\n"
            f"[bold]总页数:[/bold] {state.total_pages if state.total_pages is not None else '未知'}\n"
            f"[bold]下一页:[/bold] {'有' if state.has_next else '无'}\n"
            f"[bold]上一页:[/bold] {'有' if state.has_previous else '无'}",
            title="分页状态",
            style="cyan",
        )
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
