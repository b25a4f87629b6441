import logging
from flask import Blueprint, jsonify, current_app
from WarmHome.app.services import get_db
from WarmHome.mongodb_database.connection import ping
from WarmHome.mongodb_database.seed_data import seed_database

logger = logging.getLogger(__name__)

# Create the Blueprint
main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    try:
        database_ok = ping(get_db().client)
    except ValueError as e:
        logger.warning(f"Health check without database: {e}")
        database_ok = False

    return jsonify({
        'status': 'ok' if database_ok else 'degraded',
        'database': database_ok
    }), 200 if database_ok else 503


@main_bp.route('/seed')
def seed():
    """Insert placeholder users, suburbs and properties."""
    if not current_app.config.get('ENABLE_SEED_ROUTE'):
        return jsonify({'error': 'Seeding is disabled'}), 404

    try:
        inserted = seed_database(get_db())
        return jsonify({'message': 'Database seeded successfully', 'inserted': inserted})
    except Exception as e:
        logger.exception("Seeding failed")
        return jsonify({'error': str(e)}), 500
