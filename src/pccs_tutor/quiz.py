"""Flashcard quiz session: guess the tone of a swatch."""
import random
from collections import deque
from dataclasses import dataclass

from pccs_tutor.deck import build_deck, shuffle_deck
from pccs_tutor.errors import PccsError
from pccs_tutor.models import ColorEntry, Tone
from pccs_tutor.palette import TONES, get_tone

POINTS_PER_CORRECT = 10
HISTORY_SIZE = 5
OPTION_COUNT = 4


class QuizError(PccsError):
    """Base class for quiz misuse."""


class InvalidDeck(QuizError):
    pass


class InvalidTransition(QuizError):
    pass


@dataclass(frozen=True)
class AwaitingAnswer:
    index: int


@dataclass(frozen=True)
class ShowingResult:
    index: int
    selected: str
    is_correct: bool
    card: ColorEntry


QuizState = AwaitingAnswer | ShowingResult


class QuizSession:
    """A cyclic practice loop over one shuffled deck.

    The session alternates between AwaitingAnswer and ShowingResult;
    submit_answer() is only legal in the first and advance() only in the
    second. Illegal calls raise InvalidTransition and leave the session
    untouched.
    """

    def __init__(self, deck: list[ColorEntry], rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self.start(deck)

    @classmethod
    def new(cls, rng: random.Random | None = None) -> "QuizSession":
        rng = rng or random.Random()
        return cls(shuffle_deck(build_deck(), rng), rng=rng)

    def start(self, deck: list[ColorEntry]) -> None:
        if not deck:
            raise InvalidDeck("Cannot start a quiz on an empty deck")
        self._deck = tuple(deck)
        self._score = 0
        self._streak = 0
        self._best_streak = 0
        self._history: deque[bool] = deque(maxlen=HISTORY_SIZE)
        self._state: QuizState = AwaitingAnswer(index=0)
        self._options: tuple[str, list[Tone]] | None = None

    @property
    def deck(self) -> tuple[ColorEntry, ...]:
        return self._deck

    @property
    def state(self) -> QuizState:
        return self._state

    @property
    def index(self) -> int:
        return self._state.index

    @property
    def current_card(self) -> ColorEntry:
        return self._deck[self._state.index]

    @property
    def score(self) -> int:
        return self._score

    @property
    def streak(self) -> int:
        return self._streak

    @property
    def best_streak(self) -> int:
        return self._best_streak

    @property
    def history(self) -> tuple[bool, ...]:
        return tuple(self._history)

    def options(self, card: ColorEntry | None = None) -> list[Tone]:
        """Four answer choices: the card's tone plus three distinct distractors."""
        if card is None:
            card = self.current_card
            if self._options is not None and self._options[0] == card.id:
                return list(self._options[1])
        correct = get_tone(card.tone_id)
        others = [tone for tone in TONES if tone.id != card.tone_id]
        choices = self._rng.sample(others, OPTION_COUNT - 1) + [correct]
        self._rng.shuffle(choices)
        if card.id == self.current_card.id:
            self._options = (card.id, choices)
        return list(choices)

    def submit_answer(self, tone_id: str) -> ShowingResult:
        state = self._state
        if not isinstance(state, AwaitingAnswer):
            raise InvalidTransition("An answer was already submitted for this card")
        is_correct = tone_id == self._deck[state.index].tone_id
        if is_correct:
            self._score += POINTS_PER_CORRECT
            self._streak += 1
            self._best_streak = max(self._best_streak, self._streak)
        else:
            self._streak = 0
        self._history.append(is_correct)
        self._state = ShowingResult(
            index=state.index, selected=tone_id, is_correct=is_correct, card=self._deck[state.index],
        )
        return self._state

    def advance(self) -> AwaitingAnswer:
        state = self._state
        if not isinstance(state, ShowingResult):
            raise InvalidTransition("Submit an answer before moving to the next card")
        self._state = AwaitingAnswer(index=(state.index + 1) % len(self._deck))
        self._options = None
        return self._state
