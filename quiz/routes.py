import logging
from functools import wraps
from flask import Blueprint, request, jsonify, render_template, session, redirect, url_for

from config import PASS_THRESHOLD, SOLANA_CLUSTER
from mint.mint_gate import request_mint, mint_response
from .quiz_data import list_topics
from .quiz_engine import QuizEngine, QuizState, QuizStateError

logger = logging.getLogger(__name__)

quiz_bp = Blueprint('quiz', __name__)

SESSION_KEY = 'quiz'


def load_engine():
    return QuizEngine.from_dict(session.get(SESSION_KEY))


def save_engine(engine):
    session[SESSION_KEY] = engine.to_dict()
    session.modified = True


def quiz_action(f):
    """Load the engine from the session, run the action, save it and go back to the quiz page"""
    @wraps(f)
    def decorated(*args, **kwargs):
        engine = load_engine()
        try:
            error_response = f(engine, *args, **kwargs)
        except QuizStateError as e:
            logger.warning(f"⚠️ {e}")
            return redirect(url_for('quiz.index'))

        if error_response is not None:
            return error_response

        save_engine(engine)
        return redirect(url_for('quiz.index'))
    return decorated


@quiz_bp.route('/')
def index():
    """Quiz page, renders the view for the current state"""
    engine = load_engine()
    return render_template(
        'quiz.html',
        state=engine.state.value,
        topics=list_topics(),
        topic=engine.topic,
        question=engine.current_question,
        progress=engine.progress(),
        score=engine.score,
        pass_threshold=PASS_THRESHOLD,
        cluster=SOLANA_CLUSTER
    )


@quiz_bp.route('/quiz/state', methods=['GET'])
def quiz_state():
    """Current quiz state without the correct answers"""
    engine = load_engine()
    question = engine.current_question
    return jsonify({
        'success': True,
        'state': engine.state.value,
        'topic_id': engine.topic_id,
        'index': engine.index,
        # None until the quiz is finished
        'correct_count': None if engine.state == QuizState.QUIZ else engine.correct_count,
        'score': engine.score,
        'progress': engine.progress(),
        'question': {
            'id': question['id'],
            'text': question['text'],
            'options': question['options']
        } if question else None
    })


@quiz_bp.route('/quiz/topic', methods=['POST'])
@quiz_action
def select_topic(engine):
    engine.select_topic(request.form.get('topic_id'))


@quiz_bp.route('/quiz/answer', methods=['POST'])
@quiz_action
def answer(engine):
    question = engine.current_question
    if question is None:
        raise QuizStateError('answer', engine.state)

    try:
        option_index = int(request.form.get('option', ''))
    except ValueError:
        option_index = -1

    if not 0 <= option_index < len(question['options']):
        return jsonify({'success': False, 'error': 'Invalid answer option'}), 400

    engine.answer(question['options'][option_index])


@quiz_bp.route('/quiz/retry', methods=['POST'])
@quiz_action
def retry(engine):
    engine.retry()


@quiz_bp.route('/quiz/reset', methods=['POST'])
@quiz_action
def reset(engine):
    engine.reset()


@quiz_bp.route('/quiz/mint', methods=['POST'])
def mint():
    """Mint the degree for the score earned in this session"""
    engine = load_engine()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    user_wallet = data.get('userWallet')

    if not user_wallet:
        return jsonify({'error': 'Please connect your wallet first!'}), 400

    if engine.state != QuizState.SUCCESS:
        logger.warning(f"⚠️ Mint requested in '{engine.state.value}' state")
        return jsonify({'error': 'Pass the quiz before minting a degree.'}), 409

    engine.begin_mint()

    try:
        result = request_mint(user_wallet, engine.score)
    except Exception as e:
        logger.error(f"❌ Mint Error for {user_wallet}: {e}")
        result = {'success': False, 'error': 'Minting failed', 'details': str(e)}

    if result['success']:
        engine.mint_succeeded()
    else:
        engine.mint_failed()
    save_engine(engine)

    body, status = mint_response(result)
    body['state'] = engine.state.value
    return jsonify(body), status
