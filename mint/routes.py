import logging
from flask import Blueprint, request, jsonify

from .mint_gate import request_mint, mint_response

logger = logging.getLogger(__name__)

mint_bp = Blueprint('mint', __name__, url_prefix='/api')


@mint_bp.route(
    '/mint',
    methods=['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'],
    provide_automatic_options=False
)
def mint_degree():
    """Mint a compressed NFT degree for a passing score"""
    if request.method != 'POST':
        response = jsonify({'error': 'Method not allowed'})
        response.headers['Allow'] = 'POST'
        return response, 405

    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        user_wallet = data.get('userWallet')
        score = data.get('score')

        logger.info(f"🎓 Mint request for {user_wallet} with score {score!r}")

        body, status = mint_response(request_mint(user_wallet, score))
        return jsonify(body), status

    except Exception as e:
        logger.error(f"❌ Mint Error: {e}")
        return jsonify({
            'error': 'Minting failed',
            'details': str(e)
        }), 500
