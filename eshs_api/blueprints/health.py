"""Health blueprint: liveness probe for load balancers and monitoring."""
import logging
from flask import Blueprint, jsonify

logger = logging.getLogger(__name__)


def create_blueprint(gateway):
    bp = Blueprint('health', __name__, url_prefix='/api')

    @bp.route('/health', methods=['GET'])
    def health_check():
        """Report whether the relational store answers a trivial query."""
        try:
            gateway.ping()
        except Exception as e:
            logger.warning(f"Health check: database unreachable: {e}")
            try:
                gateway.session.rollback()
            except Exception as rollback_error:
                logger.warning(f"Health check: rollback failed: {rollback_error}")
            return jsonify({'status': 'unavailable', 'database': 'unreachable'}), 503
        return jsonify({'status': 'ok', 'database': 'ok'})

    return bp
