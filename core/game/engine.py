"""Blackjack round driver with a state machine."""

import logging
from dataclasses import asdict
from math import ceil, floor
from random import Random
from typing import Callable, NamedTuple

from transitions import Machine

from core.cards import Card
from core.hand import Hand, hand_total, is_natural
from core.shoe import ShoeManager
from core.seeding import SeedSource
from core.strategy.basic import Action, Feedback, Recommendation, StrategyOptions, critique, recommend
from core.strategy.rules import RuleSet
from core.game.events import EventEmitter, EventType, GameEvent, MessageCategory, PresentationPort
from core.game.pacing import NoPacer, Pacer
from core.game.state import (
    AvailableActions,
    HandResult,
    Outcome,
    Phase,
    RoundInvariantError,
    RoundState,
    RoundSummary,
)

logger = logging.getLogger(__name__)


class DealStep(NamedTuple):
    """One card of the opening deal."""

    to_dealer: bool
    face_down: bool


class RoundStateMachine:
    """
    Single-player blackjack round driver.

    Owns the shoe, the balance and the round state, and is the only thing
    that mutates them. Every entry point checks the phase first, so a stray
    or repeated call is a no-op that returns False. The presentation layer
    only ever hears about the table through events.
    """

    STATES = [
        {"name": phase.name.lower(), "on_enter": ["_announce_phase", f"_enter_{phase.name.lower()}"]}
        for phase in Phase
    ]

    TRANSITIONS = [
        {"trigger": "_start_deal", "source": "idle", "dest": "dealing"},
        {"trigger": "_offer_insurance", "source": "dealing", "dest": "insurance"},
        {"trigger": "_start_player_turn", "source": ["dealing", "insurance"], "dest": "player_turn"},
        {"trigger": "_start_dealer_turn", "source": "player_turn", "dest": "dealer_turn"},
        {
            "trigger": "_settle",
            "source": ["dealing", "insurance", "player_turn", "dealer_turn"],
            "dest": "resolving",
        },
        {"trigger": "_finish_round", "source": "resolving", "dest": "idle"},
    ]

    # Player, dealer up, player, dealer hole
    DEAL_SEQUENCE = (
        DealStep(to_dealer=False, face_down=False),
        DealStep(to_dealer=True, face_down=False),
        DealStep(to_dealer=False, face_down=False),
        DealStep(to_dealer=True, face_down=True),
    )

    # Cosmetic pauses, in seconds
    DEAL_PAUSE = 0.25
    HOLE_CARD_PAUSE = 0.2
    REVEAL_PAUSE = 0.4
    DEALER_DRAW_PAUSE = 0.35
    RESULT_DISPLAY = 1.8

    def __init__(
        self,
        rules: RuleSet | None = None,
        balance: int = 1000,
        seed_source: SeedSource | None = None,
        presenter: PresentationPort | None = None,
        pacer: Pacer | None = None,
        rng: Random | None = None,
        auto_bet_amount: int = 5,
    ) -> None:
        """
        Initialize the table and enter IDLE.

        Args:
            rules: Table rules (defaults to 6 decks, S17, DAS, late surrender)
            balance: Starting balance
            seed_source: Where shuffle seeds come from (unseeded if None)
            presenter: Event sink for the presentation layer
            pacer: Cosmetic pauses between steps (none if None)
            rng: Fallback generator for unseeded shuffles
            auto_bet_amount: Bet placed at every IDLE entry while auto-bet is on
        """
        if balance < 0:
            raise ValueError("balance cannot be negative")
        if auto_bet_amount < 1:
            raise ValueError("auto_bet_amount must be positive")

        self.rules = rules or RuleSet()
        self.shoe = ShoeManager(
            num_decks=self.rules.num_decks,
            reshuffle_threshold=self.rules.reshuffle_threshold,
            rng=rng,
        )
        self.round = RoundState(balance=balance)
        self.events = EventEmitter()
        if presenter is not None:
            self.events.subscribe(presenter)

        self._seed_source = seed_source
        self._pacer: Pacer = pacer or NoPacer()
        self._auto_bet = False
        self._auto_bet_amount = auto_bet_amount
        self._last_summary: RoundSummary | None = None
        self._last_feedback: Feedback | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            queued=True,
            model_attribute="_machine_state",
        )
        # The initial state's on_enter callbacks are not run by the machine
        self._announce_phase()
        self._enter_idle()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        """Get current phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def balance(self) -> int:
        return self.round.balance

    @property
    def running_count(self) -> int:
        return self.shoe.running_count

    def true_count(self) -> float:
        return self.shoe.true_count()

    @property
    def last_summary(self) -> RoundSummary | None:
        """Result of the most recently resolved round."""
        return self._last_summary

    @property
    def last_feedback(self) -> Feedback | None:
        """Verdict on the most recent player decision."""
        return self._last_feedback

    @property
    def auto_bet(self) -> bool:
        return self._auto_bet

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def available_actions(self) -> AvailableActions:
        """Work out which controls are live in the current phase."""
        phase = self.phase
        if phase == Phase.IDLE:
            return AvailableActions(deal=0 < self.round.bet <= self.round.balance)
        if phase == Phase.INSURANCE:
            return AvailableActions(
                insurance=self.round.balance >= self._insurance_stake(),
                no_insurance=True,
            )
        if phase != Phase.PLAYER_TURN:
            return AvailableActions()

        hand = self.round.active_hand
        if hand is None or hand.done:
            return AvailableActions()

        total = hand.value
        first_decision = len(hand.cards) == 2
        affordable = self.round.balance >= hand.bet

        return AvailableActions(
            hit=total < 21 and not hand.is_ace_split,
            stand=True,
            double=(
                first_decision
                and affordable
                and (self.rules.double_after_split or not hand.from_split)
            ),
            split=(
                first_decision
                and hand.is_pair
                and affordable
                and self.round.split_count < self.rules.max_splits
                and not hand.is_ace_split
            ),
            surrender=(
                self.rules.surrender_allowed
                and first_decision
                and len(self.round.hands) == 1
                and not hand.from_split
            ),
        )

    def advice(self) -> Recommendation | None:
        """Basic strategy play for the active hand, outside PLAYER_TURN None."""
        if self.phase != Phase.PLAYER_TURN:
            return None
        hand = self.round.active_hand
        if hand is None or not self.round.dealer_cards:
            return None

        actions = self.available_actions()
        options = StrategyOptions(
            can_hit=actions.hit,
            can_double=actions.double,
            can_split=actions.split,
            can_surrender=actions.surrender,
            is_first_action=len(hand.cards) == 2 and not hand.from_split,
        )
        return recommend(hand.cards, self.round.dealer_cards[0].value, options)

    # ------------------------------------------------------------------
    # Betting (IDLE)
    # ------------------------------------------------------------------

    def add_bet(self, amount: int) -> bool:
        """Add chips to the pending bet, capped at the balance."""
        if self.phase != Phase.IDLE:
            return self._reject("add_bet")
        if amount <= 0 or self.round.balance <= 0:
            return self._reject("add_bet")

        self.round.bet = min(self.round.bet + amount, self.round.balance)
        self._emit_bet()
        self._emit_actions()
        return True

    def clear_bet(self) -> bool:
        """Take the pending bet back."""
        if self.phase != Phase.IDLE:
            return self._reject("clear_bet")

        self.round.bet = 0
        self._emit_bet()
        self._emit_actions()
        return True

    def deal(self) -> bool:
        """
        Commit the pending bet and play the opening deal.

        The bet is debited before any card is dealt.
        """
        if self.phase != Phase.IDLE:
            return self._reject("deal")
        if self.round.bet <= 0 or self.round.bet > self.round.balance:
            return self._reject("deal")

        if self.shoe.cards_remaining < len(self.DEAL_SEQUENCE):
            self._shuffle_shoe()
        self._debit(self.round.bet)
        self._start_deal()
        return True

    def force_shuffle(self) -> bool:
        """Start a fresh shoe between rounds."""
        if self.phase != Phase.IDLE:
            return self._reject("force_shuffle")

        self._shuffle_shoe()
        self._emit_actions()
        return True

    def set_auto_bet(self, enabled: bool) -> None:
        """Toggle placing the minimum bet automatically at each new round."""
        self._auto_bet = enabled
        if enabled and self.phase == Phase.IDLE and self.round.bet == 0:
            self._place_auto_bet()

    # ------------------------------------------------------------------
    # Insurance (INSURANCE)
    # ------------------------------------------------------------------

    def take_insurance(self) -> bool:
        """Stake half the original bet on the dealer holding blackjack."""
        if self.phase != Phase.INSURANCE:
            return self._reject("insurance")

        stake = self._insurance_stake()
        if self.round.balance < stake:
            return self._reject("insurance")

        self.round.insurance_bet = stake
        self._debit(stake)
        self._after_insurance()
        return True

    def decline_insurance(self) -> bool:
        """Play on without insurance."""
        if self.phase != Phase.INSURANCE:
            return self._reject("no_insurance")

        self.round.insurance_bet = 0
        self._after_insurance()
        return True

    # ------------------------------------------------------------------
    # Player actions (PLAYER_TURN)
    # ------------------------------------------------------------------

    def hit(self) -> bool:
        """Player takes another card on the active hand."""
        if self.phase != Phase.PLAYER_TURN:
            return self._reject("hit")
        hand = self.round.active_hand
        if hand is None or not self.available_actions().hit:
            return self._reject("hit")

        self._judge(Action.HIT)
        self._draw_into(hand.cards)
        self._emit_hands()

        total, _, is_bust = hand.total
        if is_bust:
            hand.done = True
            self._message(f"Bust! ({total})", MessageCategory.LOSS)
            self._advance_hand()
        elif total == 21:
            hand.done = True
            self._advance_hand()
        else:
            self._emit_turn()
        return True

    def stand(self) -> bool:
        """Player keeps the active hand."""
        if self.phase != Phase.PLAYER_TURN:
            return self._reject("stand")
        hand = self.round.active_hand
        if hand is None or not self.available_actions().stand:
            return self._reject("stand")

        self._judge(Action.STAND)
        hand.done = True
        self._advance_hand()
        return True

    def double_down(self) -> bool:
        """Double the bet, take exactly one card and finish the hand."""
        if self.phase != Phase.PLAYER_TURN:
            return self._reject("double")
        hand = self.round.active_hand
        if hand is None or not self.available_actions().double:
            return self._reject("double")

        self._judge(Action.DOUBLE)
        self._debit(hand.bet)
        hand.bet *= 2
        hand.doubled = True
        self._emit_bet()

        self._draw_into(hand.cards)
        hand.done = True
        self._emit_hands()
        if hand.is_busted:
            self._message(f"Bust! ({hand.value})", MessageCategory.LOSS)

        self._advance_hand()
        return True

    def split(self) -> bool:
        """
        Split a pair into two hands, each carrying the original bet.

        Each new hand gets one more card. Split Aces get that one card only.
        """
        if self.phase != Phase.PLAYER_TURN:
            return self._reject("split")
        hand = self.round.active_hand
        if hand is None or not self.available_actions().split:
            return self._reject("split")

        self._judge(Action.SPLIT)
        self._debit(hand.bet)
        self.round.split_count += 1
        if self.round.split_count > self.rules.max_splits:
            raise RoundInvariantError(f"split count {self.round.split_count} over the limit")

        aces = hand.cards[0].is_ace
        first, second = (
            Hand(cards=[card], bet=hand.bet, is_ace_split=aces, from_split=True)
            for card in hand.cards
        )
        idx = self.round.active_hand_idx
        self.round.hands[idx:idx + 1] = [first, second]

        self._draw_into(first.cards)
        self._draw_into(second.cards)
        if aces:
            first.done = True
            second.done = True
        self._emit_bet()
        self._emit_hands()

        if aces:
            self._advance_hand()
        else:
            self._emit_turn()
        return True

    def surrender(self) -> bool:
        """Give up the hand for half the bet back."""
        if self.phase != Phase.PLAYER_TURN:
            return self._reject("surrender")
        hand = self.round.active_hand
        if hand is None or not self.available_actions().surrender:
            return self._reject("surrender")

        self._judge(Action.SURRENDER)
        hand.surrendered = True
        hand.done = True
        self._emit_hands()
        self._message(f"Surrendered, lose ${ceil(hand.bet / 2)}", MessageCategory.LOSS)
        self._advance_hand()
        return True

    # ------------------------------------------------------------------
    # Phase handlers
    # ------------------------------------------------------------------

    def _announce_phase(self) -> None:
        self.events.emit_new(EventType.PHASE_CHANGED, phase=self.phase.name)

    def _enter_idle(self) -> None:
        """Reset the round, reshuffle if the shoe is low, take bets."""
        self.round.reset()
        self._emit_bet()
        self._emit_balance()
        self._emit_hands()
        self._emit_dealer(revealed=False)

        if self.shoe.needs_reshuffle():
            self._shuffle_shoe()
        else:
            self._message("Place your bet and deal.", MessageCategory.NONE)
        self._emit_count()

        if self._auto_bet:
            self._place_auto_bet()
        self._emit_actions()

    def _enter_dealing(self) -> None:
        """Deal the opening four cards and route the round."""
        self._emit_actions()
        self._message("", MessageCategory.NONE)

        hand = Hand(bet=self.round.bet)
        self.round.hands = [hand]
        self.round.dealer_cards = []
        self.round.active_hand_idx = 0

        for step in self.DEAL_SEQUENCE:
            target = self.round.dealer_cards if step.to_dealer else hand.cards
            if self._draw_into(target, face_down=step.face_down) is None:
                raise RoundInvariantError("shoe ran out during the opening deal")
            if step.to_dealer:
                self._emit_dealer(revealed=False)
            else:
                self._emit_hands()
            self._pacer.pause(self.HOLE_CARD_PAUSE if step.face_down else self.DEAL_PAUSE)

        if self.round.dealer_cards[0].is_ace:
            self._offer_insurance()
            return

        if is_natural(hand.cards):
            dealer_blackjack = self._dealer_has_blackjack()
            self._reveal_hole_card()
            if dealer_blackjack:
                self._message("PUSH: both Blackjack!", MessageCategory.PUSH)
            else:
                self._message("BLACKJACK! 3:2", MessageCategory.BLACKJACK)
            self._settle()
            return

        self._start_player_turn()

    def _enter_insurance(self) -> None:
        self._message("Dealer shows Ace. Insurance?", MessageCategory.INFO)
        self._emit_actions()

    def _after_insurance(self) -> None:
        """Peek at the hole card once the insurance decision is in."""
        self._emit_actions()
        dealer_blackjack = self._dealer_has_blackjack()
        player_blackjack = is_natural(self.round.hands[0].cards)

        if dealer_blackjack:
            self._reveal_hole_card()
            if player_blackjack:
                self._message("PUSH: both Blackjack!", MessageCategory.PUSH)
            else:
                self._message("Dealer Blackjack!", MessageCategory.LOSS)
            self._settle()
            return

        if player_blackjack:
            self._reveal_hole_card()
            self._message("BLACKJACK! 3:2", MessageCategory.BLACKJACK)
            self._settle()
            return

        self._start_player_turn()

    def _enter_player_turn(self) -> None:
        self._last_feedback = None
        self.events.emit_new(EventType.STRATEGY_FEEDBACK, text="", category=MessageCategory.NONE)
        self._message("", MessageCategory.NONE)
        self._emit_turn()

    def _enter_dealer_turn(self) -> None:
        """Reveal the hole card and draw to 17. Soft 17 stands."""
        self._emit_actions()
        self._reveal_hole_card()
        self._pacer.pause(self.REVEAL_PAUSE)

        dealer = self.round.dealer_cards
        while hand_total(dealer, include_hidden=True).total < self.rules.dealer_stands_on:
            if self._draw_into(dealer) is None:
                break
            self._emit_dealer(revealed=True)
            self._pacer.pause(self.DEALER_DRAW_PAUSE)

        self._settle()

    def _enter_resolving(self) -> None:
        """Settle insurance, then every hand, then return to IDLE."""
        self._emit_actions()
        dealer = self.round.dealer_cards
        # Rounds where every hand busted or surrendered skip the dealer turn
        if any(card.face_down for card in dealer):
            self._reveal_hole_card()
        dealer_total = hand_total(dealer, include_hidden=True)
        dealer_blackjack = self._dealer_has_blackjack()
        lines: list[str] = []

        insurance_returned = 0
        if self.round.insurance_bet > 0:
            if dealer_blackjack:
                winnings = self.round.insurance_bet * self.rules.insurance_payout
                insurance_returned = self.round.insurance_bet + winnings
                lines.append(f"Insurance +${winnings}")
            else:
                lines.append(f"Insurance -${self.round.insurance_bet}")

        results = [
            self._settle_hand(idx, hand, dealer_total.total, dealer_blackjack)
            for idx, hand in enumerate(self.round.hands)
        ]
        lines.extend(f"Hand {r.index + 1}: {r.label}" for r in results)

        self._credit(insurance_returned + sum(r.returned for r in results))

        if len(lines) == 1 and results:
            message = results[0].label
        else:
            message = " | ".join(lines)
        category = self._summary_category(results)

        self._last_summary = RoundSummary(
            hands=tuple(results),
            dealer_cards=tuple(dealer),
            dealer_total=dealer_total.total,
            dealer_blackjack=dealer_blackjack,
            insurance_bet=self.round.insurance_bet,
            insurance_returned=insurance_returned,
            message=message,
            category=category,
            balance=self.round.balance,
        )
        logger.info("Round resolved: %s (balance %s)", message, self.round.balance)

        self._message(message, category)
        self.events.emit_new(
            EventType.ROUND_ENDED,
            summary=self._last_summary,
            net=self._last_summary.net,
            balance=self.round.balance,
        )

        self._pacer.pause(self.RESULT_DISPLAY)
        self._finish_round()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _settle_hand(
        self,
        idx: int,
        hand: Hand,
        dealer_total: int,
        dealer_blackjack: bool,
    ) -> HandResult:
        """Work out what one hand returns to the balance."""
        bet = hand.bet

        if hand.surrendered:
            return HandResult(idx, Outcome.SURRENDER, bet, bet // 2, f"Surrender (-${ceil(bet / 2)})")

        total = hand.value
        if hand.is_busted:
            return HandResult(idx, Outcome.BUST, bet, 0, f"BUST -${bet}")

        player_blackjack = hand.is_blackjack and len(self.round.hands) == 1
        if player_blackjack and not dealer_blackjack:
            bonus = floor(bet * self.rules.blackjack_payout)
            return HandResult(idx, Outcome.BLACKJACK, bet, bet + bonus, f"BLACKJACK +${bonus}")
        if player_blackjack and dealer_blackjack:
            return HandResult(idx, Outcome.PUSH, bet, bet, "PUSH (both BJ)")
        if dealer_blackjack:
            return HandResult(idx, Outcome.LOSE, bet, 0, f"LOSE -${bet}")

        if dealer_total > 21 or total > dealer_total:
            return HandResult(idx, Outcome.WIN, bet, bet * 2, f"WIN +${bet}")
        if total == dealer_total:
            return HandResult(idx, Outcome.PUSH, bet, bet, "PUSH")
        return HandResult(idx, Outcome.LOSE, bet, 0, f"LOSE -${bet}")

    @staticmethod
    def _summary_category(results: list[HandResult]) -> MessageCategory:
        wins = [r for r in results if r.outcome in (Outcome.WIN, Outcome.BLACKJACK)]
        losses = [r for r in results if r.outcome in (Outcome.LOSE, Outcome.BUST, Outcome.SURRENDER)]
        pushes = [r for r in results if r.outcome == Outcome.PUSH]

        if wins and not losses:
            if all(r.outcome == Outcome.BLACKJACK for r in wins):
                return MessageCategory.BLACKJACK
            return MessageCategory.WIN
        if losses and not wins:
            return MessageCategory.LOSS
        if pushes and not wins:
            return MessageCategory.PUSH
        return MessageCategory.INFO

    def _advance_hand(self) -> None:
        """Move to the next unfinished hand, or on to the dealer."""
        hands = self.round.hands
        current = self.round.active_hand_idx
        following = (i for i, h in enumerate(hands) if i > current and not h.done)
        next_idx = next(following, None)

        if next_idx is not None:
            self.round.active_hand_idx = next_idx
            self._emit_hands()
            self._emit_turn()
            return

        if any(hand.is_alive for hand in hands):
            self._start_dealer_turn()
        else:
            self._settle()

    def _judge(self, chosen: Action) -> None:
        """Grade a decision against basic strategy before it is carried out."""
        recommendation = self.advice()
        if recommendation is None:
            return
        feedback = critique(chosen, recommendation)
        self._last_feedback = feedback
        self.events.emit_new(
            EventType.STRATEGY_FEEDBACK,
            text=feedback.message,
            category=MessageCategory.CORRECT if feedback.correct else MessageCategory.INCORRECT,
            chosen=chosen.value,
            recommended=feedback.recommended.value,
            table_type=recommendation.table_type.value,
            row_key=recommendation.row_key,
        )

    def _draw_into(self, cards: list[Card], face_down: bool = False) -> Card | None:
        """Deal one card onto a pile. Nothing happens if the shoe is empty."""
        card = self.shoe.deal(face_down=face_down)
        if card is None:
            return None
        cards.append(card)
        self._emit_count()
        return card

    def _reveal_hole_card(self) -> None:
        if len(self.round.dealer_cards) >= 2:
            self.shoe.reveal(self.round.dealer_cards[1])
        self._emit_dealer(revealed=True)
        self._emit_count()

    def _dealer_has_blackjack(self) -> bool:
        """Peek, hole card included."""
        return is_natural(self.round.dealer_cards, include_hidden=True)

    def _insurance_stake(self) -> int:
        return self.round.bet // 2

    def _shuffle_shoe(self) -> None:
        if self._seed_source is not None:
            self._message("Fetching seed…", MessageCategory.INFO)
        seeded = self.shoe.reshuffle(self._seed_source)
        self.events.emit_new(
            EventType.SHOE_SHUFFLED,
            seeded=seeded,
            seed=self.shoe.seed,
            cards_remaining=self.shoe.cards_remaining,
        )
        self._emit_count()
        self._message("New shoe. Place your bet.", MessageCategory.INFO)

    def _place_auto_bet(self) -> None:
        if self.round.balance >= self._auto_bet_amount:
            self.round.bet = self._auto_bet_amount
            self._emit_bet()
            self._emit_actions()

    def _debit(self, amount: int) -> None:
        """Take money off the balance before it is put at risk."""
        if amount < 0 or amount > self.round.balance:
            raise RoundInvariantError(
                f"cannot debit {amount} from a balance of {self.round.balance}"
            )
        self.round.balance -= amount
        self._emit_balance()

    def _credit(self, amount: int) -> None:
        if amount < 0:
            raise RoundInvariantError(f"cannot credit a negative amount ({amount})")
        self.round.balance += amount
        self._emit_balance()

    def _reject(self, action: str) -> bool:
        logger.debug("Ignored %s during %s", action, self.phase.name)
        return False

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def _message(self, text: str, category: MessageCategory) -> None:
        self.events.emit_new(EventType.MESSAGE, text=text, category=category)

    def _emit_turn(self) -> None:
        """Refresh controls and the chart row for the active hand."""
        self._emit_actions()
        recommendation = self.advice()
        if recommendation is not None:
            self.events.emit_new(
                EventType.STRATEGY_HINT,
                table_type=recommendation.table_type.value,
                row_key=recommendation.row_key,
            )

    def _emit_actions(self) -> None:
        self.events.emit_new(EventType.ACTIONS_UPDATED, **asdict(self.available_actions()))

    def _emit_bet(self) -> None:
        total = self.round.total_wagered if self.round.hands else self.round.bet
        self.events.emit_new(EventType.BET_UPDATED, bet=total)

    def _emit_balance(self) -> None:
        self.events.emit_new(EventType.BALANCE_UPDATED, balance=self.round.balance)

    def _emit_count(self) -> None:
        self.events.emit_new(
            EventType.COUNT_UPDATED,
            running_count=self.shoe.running_count,
            true_count=self.shoe.true_count(),
            decks_remaining=self.shoe.decks_remaining,
            cards_remaining=self.shoe.cards_remaining,
            fill_ratio=self.shoe.fill_ratio,
        )

    def _emit_hands(self) -> None:
        active = self.round.active_hand_idx
        self.events.emit_new(
            EventType.HANDS_UPDATED,
            hands=[
                {
                    "cards": [str(card) for card in hand.cards],
                    "total": hand.value,
                    "label": str(hand),
                    "bet": hand.bet,
                    "active": idx == active and not hand.done,
                    "done": hand.done,
                }
                for idx, hand in enumerate(self.round.hands)
            ],
        )

    def _emit_dealer(self, revealed: bool) -> None:
        cards = self.round.dealer_cards
        if not cards:
            score = "—"
        elif revealed:
            total = hand_total(cards, include_hidden=True)
            score = f"{total.total} BUST" if total.is_bust else str(total.total)
        else:
            score = f"{hand_total(cards).total} +?"
        self.events.emit_new(
            EventType.DEALER_UPDATED,
            cards=[str(card) for card in cards],
            score=score,
            revealed=revealed,
        )
