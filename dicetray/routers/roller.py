"""Dice roller page and its form actions.

Every action is a plain form POST answered with a 303 back to the page.
Numeric fields are taken as raw strings so malformed input falls through to
the roll-line coercion rules instead of failing validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.requests import Request

from dicetray.dependencies import get_table
from dicetray.dice import DiceType
from dicetray.rendering import templates
from dicetray.roll_lines import SetDiceCount, SetDiceType, SetLabel, SetModifier
from dicetray.schemas import TableState
from dicetray.table import DiceTable

router = APIRouter()


def _back() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def roller_page(request: Request, table: DiceTable = Depends(get_table)) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "roller.html",
        {
            "username": table.username,
            "lines": table.lines.lines,
            "history": table.history.entries(),
            "dice_types": list(DiceType),
        },
    )


@router.get("/state", response_model=TableState)
async def table_state(table: DiceTable = Depends(get_table)) -> TableState:
    """Read-only snapshot of the table for scripted clients."""
    return TableState.from_table(table)


# ---------------------------------------------------------------------------
# Roll lines
# ---------------------------------------------------------------------------


@router.post("/lines")
async def add_line(table: DiceTable = Depends(get_table)) -> RedirectResponse:
    table.add_line()
    return _back()


@router.post("/lines/{line_id}/delete")
async def remove_line(line_id: int, table: DiceTable = Depends(get_table)) -> RedirectResponse:
    table.remove_line(line_id)
    return _back()


@router.post("/lines/{line_id}/label")
async def set_label(
    line_id: int,
    label: str = Form(""),
    table: DiceTable = Depends(get_table),
) -> RedirectResponse:
    table.update(line_id, SetLabel(label))
    return _back()


@router.post("/lines/{line_id}/dice-count")
async def set_dice_count(
    line_id: int,
    dice_count: str = Form(""),
    table: DiceTable = Depends(get_table),
) -> RedirectResponse:
    table.update(line_id, SetDiceCount(dice_count))
    return _back()


@router.post("/lines/{line_id}/dice-type")
async def set_dice_type(
    line_id: int,
    dice_type: str = Form(""),
    table: DiceTable = Depends(get_table),
) -> RedirectResponse:
    table.update(line_id, SetDiceType(dice_type))
    return _back()


@router.post("/lines/{line_id}/modifier")
async def set_modifier(
    line_id: int,
    modifier: str = Form(""),
    table: DiceTable = Depends(get_table),
) -> RedirectResponse:
    table.update(line_id, SetModifier(modifier))
    return _back()


# ---------------------------------------------------------------------------
# Rolling and history
# ---------------------------------------------------------------------------


@router.post("/lines/{line_id}/roll")
async def roll_line(line_id: int, table: DiceTable = Depends(get_table)) -> RedirectResponse:
    table.roll_line(line_id)
    return _back()


@router.post("/roll-all")
async def roll_all(table: DiceTable = Depends(get_table)) -> RedirectResponse:
    table.roll_all()
    return _back()


@router.post("/history/clear")
async def clear_history(table: DiceTable = Depends(get_table)) -> RedirectResponse:
    table.clear_history()
    return _back()
