import logging

from .routes import mint_bp
from .mint_gate import request_mint, is_score_eligible
from .blockchain import DegreeMintService

logger = logging.getLogger(__name__)


def init_mint(app):
    """Register degree mint routes"""
    app.register_blueprint(mint_bp)
    logger.info("✅ Mint module initialized")
    logger.info("   POST /api/mint - Mint degree for a passing score")
    return True


__all__ = ['init_mint', 'mint_bp', 'request_mint', 'is_score_eligible', 'DegreeMintService']
