"""Strategy chart and advice endpoints."""

from fastapi import APIRouter, HTTPException, Query

from api.schemas import AdviceResponse, CardResponse, ChartRowResponse, StrategyChartResponse
from trainer.cards import Card
from trainer.hand import Hand
from trainer.strategy import Action, CHART_COLUMNS, correct_action, strategy_chart

router = APIRouter()


def _parse_cards(notation: str) -> list[Card]:
    """Parse comma separated card notation such as '8S,8H'."""
    try:
        return [Card.from_string(part) for part in notation.split(",") if part.strip()]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/chart")
async def get_chart() -> StrategyChartResponse:
    """Return the printable basic strategy chart."""
    return StrategyChartResponse(
        columns=list(CHART_COLUMNS),
        sections={
            title: [ChartRowResponse(hand=row.hand, actions=list(row.codes)) for row in rows]
            for title, rows in strategy_chart().items()
        },
        legend={action.value: action.description for action in Action},
    )


@router.get("/advice")
async def get_advice(
    player: str = Query(..., description="Two player cards, e.g. 'AS,7H'"),
    dealer: str = Query(..., description="Dealer upcard, e.g. '6D'"),
) -> AdviceResponse:
    """Look up the basic strategy action for any two-card hand."""
    player_cards = _parse_cards(player)
    dealer_cards = _parse_cards(dealer)

    if len(player_cards) != 2:
        raise HTTPException(status_code=400, detail="Player hand must have exactly two cards")
    if len(dealer_cards) != 1:
        raise HTTPException(status_code=400, detail="Dealer shows exactly one card")

    hand = Hand(player_cards)
    upcard = dealer_cards[0]
    action = correct_action(hand.cards, upcard.value)

    return AdviceResponse(
        player_cards=[
            CardResponse(rank=str(c.rank), suit=str(c.suit), value=c.value)
            for c in player_cards
        ],
        dealer_upcard=CardResponse(
            rank=str(upcard.rank),
            suit=str(upcard.suit),
            value=upcard.value,
        ),
        player_value=hand.value,
        is_soft=hand.is_soft,
        is_pair=hand.is_pair,
        correct_action=action.name,
        description=action.description,
    )
