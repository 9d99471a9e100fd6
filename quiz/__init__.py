import logging

from .routes import quiz_bp
from .quiz_engine import QuizEngine, QuizState, QuizStateError, calculate_percentage, is_passing
from .quiz_data import TOPICS, get_topic, list_topics

logger = logging.getLogger(__name__)


def init_quiz(app):
    """Initialize the quiz module with Flask app"""
    app.register_blueprint(quiz_bp)

    logger.info(f"🎓 Quiz module initialized with {len(TOPICS)} topics")
    logger.info("📚 Available endpoints:")
    logger.info("   GET  / - Quiz page")
    logger.info("   GET  /quiz/state - Current quiz state")
    logger.info("   POST /quiz/topic - Select topic")
    logger.info("   POST /quiz/answer - Answer current question")
    logger.info("   POST /quiz/retry - Retry failed quiz")
    logger.info("   POST /quiz/reset - Back to topic selection")
    logger.info("   POST /quiz/mint - Mint degree for this session")
    return True


__all__ = [
    'init_quiz',
    'quiz_bp',
    'QuizEngine',
    'QuizState',
    'QuizStateError',
    'calculate_percentage',
    'is_passing',
    'TOPICS',
    'get_topic',
    'list_topics'
]
