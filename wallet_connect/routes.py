from flask import Blueprint, jsonify

from config import SOLANA_CLUSTER, SOLANA_RPC_URL

wallet_connect_bp = Blueprint("wallet_connect", __name__, url_prefix="/wallet-connect")


@wallet_connect_bp.route("/config", methods=["GET"])
def wallet_connect_config():
    """Expose wallet adapter runtime config to frontend module."""
    return jsonify({
        "success": True,
        "wallet": {
            "provider": "phantom",
            "cluster": SOLANA_CLUSTER,
            "rpc_url": SOLANA_RPC_URL
        }
    })
