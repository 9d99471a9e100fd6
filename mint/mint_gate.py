import logging
from numbers import Number

from config import PASS_THRESHOLD
from .blockchain import DegreeMintService

logger = logging.getLogger(__name__)

SCORE_TOO_LOW_MESSAGE = "Score too low to mint degree."
MINT_SUCCESS_MESSAGE = "Degree Minted!"


def is_score_eligible(score) -> bool:
    """A score qualifies when it is a number of at least PASS_THRESHOLD. 0 counts as missing."""
    if isinstance(score, bool) or not isinstance(score, Number):
        return False
    return bool(score) and score >= PASS_THRESHOLD


def request_mint(wallet, score) -> dict:
    """Check the score threshold, then mint a degree to wallet.

    Returns a result dict. Rejections carry 'rejected': True and never
    touch the chain. Mint failures carry the underlying error in 'details'.
    """
    if not is_score_eligible(score):
        logger.warning(f"⚠️ Mint rejected for {wallet}: score {score!r} below {PASS_THRESHOLD}")
        return {
            'success': False,
            'rejected': True,
            'error': SCORE_TOO_LOW_MESSAGE
        }

    logger.info(f"💰 Score {score}% accepted, minting degree to {wallet}")

    # Credentials and client are loaded per request
    service = DegreeMintService()
    result = service.mint_degree(wallet)

    if not result.get('success'):
        logger.error(f"❌ Degree mint failed for {wallet}: {result.get('error')}")
        return {
            'success': False,
            'rejected': False,
            'error': 'Minting failed',
            'details': result.get('error', 'Unknown error')
        }

    return {
        'success': True,
        'message': MINT_SUCCESS_MESSAGE,
        'signature': result.get('signature'),
        'explorer_url': result.get('explorer_url')
    }


def mint_response(result):
    """Map a request_mint result to a JSON body and HTTP status"""
    if result['success']:
        return {
            'success': True,
            'message': result['message'],
            'signature': result.get('signature'),
            'explorer_url': result.get('explorer_url')
        }, 200

    if result.get('rejected'):
        return {'error': result['error']}, 400

    return {'error': result['error'], 'details': result.get('details', '')}, 500
