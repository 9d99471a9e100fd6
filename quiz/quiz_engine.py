import logging
from enum import Enum
from typing import Dict, Any, Optional

from config import PASS_THRESHOLD
from .quiz_data import get_topic

logger = logging.getLogger(__name__)


class QuizState(str, Enum):
    TOPIC_SELECT = 'topic-select'
    QUIZ = 'quiz'
    SUCCESS = 'success'
    FAIL = 'fail'
    MINTING = 'minting'


TERMINAL_STATES = (QuizState.SUCCESS, QuizState.FAIL)


class QuizStateError(Exception):
    """Raised when an action is not allowed in the current quiz state"""

    def __init__(self, action, state):
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while in '{state.value}' state")


def calculate_percentage(correct_count: int, total_questions: int) -> int:
    """round(100 * correct / total), halves rounded up like the browser's Math.round"""
    if total_questions <= 0:
        return 0
    return (200 * correct_count + total_questions) // (2 * total_questions)


def is_passing(score: Optional[int], threshold: int = PASS_THRESHOLD) -> bool:
    return score is not None and score >= threshold


class QuizEngine:
    """Quiz session state machine.

    topic-select -> quiz -> success | fail, then retry -> quiz or
    reset -> topic-select. minting is only reachable from success.
    """

    def __init__(self):
        self.state = QuizState.TOPIC_SELECT
        self.topic_id = None
        self.index = 0
        self.correct_count = 0
        self.score = None

    @property
    def topic(self) -> Optional[Dict[str, Any]]:
        return get_topic(self.topic_id) if self.topic_id else None

    @property
    def total_questions(self) -> int:
        topic = self.topic
        return len(topic['questions']) if topic else 0

    @property
    def current_question(self) -> Optional[Dict[str, Any]]:
        if self.state != QuizState.QUIZ:
            return None
        return self.topic['questions'][self.index]

    @property
    def passed(self) -> bool:
        return is_passing(self.score)

    def progress(self) -> Dict[str, Any]:
        total = self.total_questions
        position = min(self.index + 1, total) if total else 0
        return {
            'position': position,
            'total': total,
            'percent': round(position / total * 100) if total else 0
        }

    def _require(self, action, *states):
        if self.state not in states:
            raise QuizStateError(action, self.state)

    def _restart(self):
        self.index = 0
        self.correct_count = 0
        self.score = None

    def select_topic(self, topic_id) -> bool:
        """Start a quiz on the given topic. Unknown ids are ignored."""
        if get_topic(topic_id) is None:
            logger.warning(f"⚠️ Ignoring unknown topic: {topic_id}")
            return False

        self.topic_id = topic_id
        self._restart()
        self.state = QuizState.QUIZ
        logger.info(f"🎯 Quiz started on topic {topic_id}")
        return True

    def answer(self, option: str) -> bool:
        """Record an answer for the current question, returns whether it was correct"""
        self._require('answer', QuizState.QUIZ)

        question = self.current_question
        is_correct = option == question['correct']
        if is_correct:
            self.correct_count += 1

        if self.index < self.total_questions - 1:
            self.index += 1
        else:
            self._finish()

        return is_correct

    def _finish(self):
        self.score = calculate_percentage(self.correct_count, self.total_questions)
        self.state = QuizState.SUCCESS if self.passed else QuizState.FAIL
        logger.info(f"📊 Quiz finished on {self.topic_id}: {self.correct_count}/{self.total_questions} ({self.score}%) -> {self.state.value}")

    def retry(self):
        self._require('retry', QuizState.FAIL)
        self._restart()
        self.state = QuizState.QUIZ

    def reset(self):
        self._require('reset', *TERMINAL_STATES)
        self.topic_id = None
        self._restart()
        self.state = QuizState.TOPIC_SELECT

    def begin_mint(self):
        self._require('mint', QuizState.SUCCESS)
        self.state = QuizState.MINTING

    def mint_succeeded(self):
        self._require('complete mint', QuizState.MINTING)
        self.topic_id = None
        self._restart()
        self.state = QuizState.TOPIC_SELECT

    def mint_failed(self):
        # Back to success so the user can press the mint button again
        self._require('fail mint', QuizState.MINTING)
        self.state = QuizState.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'state': self.state.value,
            'topic_id': self.topic_id,
            'index': self.index,
            'correct_count': self.correct_count,
            'score': self.score
        }

    @classmethod
    def from_dict(cls, data) -> 'QuizEngine':
        """Restore an engine from session data, starting fresh if it is stale or malformed"""
        engine = cls()
        if not data:
            return engine

        try:
            state = QuizState(data.get('state'))
            topic_id = data.get('topic_id')
            index = int(data.get('index', 0))
            correct_count = int(data.get('correct_count', 0))
            score = data.get('score')
            score = int(score) if score is not None else None
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"⚠️ Discarding malformed quiz session: {e}")
            return engine

        if state == QuizState.TOPIC_SELECT:
            return engine

        topic = get_topic(topic_id)
        if topic is None or not 0 <= index < len(topic['questions']) or not 0 <= correct_count <= len(topic['questions']):
            logger.warning(f"⚠️ Discarding stale quiz session for topic {topic_id}")
            return engine

        engine.state = state
        engine.topic_id = topic_id
        engine.index = index
        engine.correct_count = correct_count
        if score is not None:
            engine.score = score
        elif state != QuizState.QUIZ:
            engine.score = calculate_percentage(correct_count, len(topic['questions']))
        return engine
