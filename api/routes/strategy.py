"""Basic strategy endpoints."""

from fastapi import APIRouter, HTTPException

from api.routes.table import get_table
from api.schemas import AdviceResponse, ChartResponse, ChartRowResponse
from core.strategy.basic import UPCARD_LABELS, TableType, chart

router = APIRouter()


@router.get("/advice")
def get_advice() -> AdviceResponse:
    """Recommended play for the active hand."""
    table = get_table()
    with table.lock:
        recommendation = table.machine.advice()
        if recommendation is None:
            raise HTTPException(
                status_code=409,
                detail=f"No decision pending during {table.machine.phase.name}",
            )
        upcard = table.machine.round.dealer_cards[0]

    return AdviceResponse(
        action=recommendation.action.name.lower(),
        table_type=recommendation.table_type.value,
        row_key=recommendation.row_key,
        dealer_upcard=str(upcard.rank),
    )


@router.get("/chart")
def get_chart() -> ChartResponse:
    """The hard, soft and pair charts for 6 decks, S17, DAS, late surrender."""
    tables = chart()

    def rows(table_type: TableType) -> list[ChartRowResponse]:
        return [
            ChartRowResponse(key=key, actions=[a.value for a in actions])
            for key, actions in tables[table_type]
        ]

    return ChartResponse(
        upcards=list(UPCARD_LABELS),
        hard=rows(TableType.HARD),
        soft=rows(TableType.SOFT),
        pairs=rows(TableType.PAIRS),
    )
