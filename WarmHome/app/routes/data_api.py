import json
import logging
from flask import Blueprint, request, jsonify
from WarmHome.app.services import get_db
from WarmHome.app.utils import to_json_safe, parse_number
from WarmHome.mongodb_database import property_queries as queries

logger = logging.getLogger(__name__)

# Create the Blueprint
data_bp = Blueprint('data_api', __name__, url_prefix='/api/data')


def _respond(label, query, *args, error_message='Failed to fetch data', **kwargs):
    """Run a read query against the database; any failure becomes a 500."""
    try:
        return jsonify(to_json_safe(query(get_db(), *args, **kwargs)))
    except Exception:
        logger.exception(f"Error fetching {label}")
        return jsonify({'error': error_message}), 500


@data_bp.route('/states')
def states():
    return _respond('states', queries.get_states)


@data_bp.route('/suburbs')
def suburbs():
    return _respond('suburbs', queries.get_suburbs, request.args.get('state') or None)


@data_bp.route('/suburb-overviews')
def suburb_overviews():
    return _respond('suburb overviews', queries.fetch_suburb_overviews)


@data_bp.route('/bar-chart')
def bar_chart():
    return _respond('bar chart data', queries.get_bar_chart_data, request.args.get('state') or None)


@data_bp.route('/line-graph')
def line_graph():
    return _respond('line graph data', queries.get_line_graph_data, request.args.get('suburb') or None)


@data_bp.route('/city-comparison')
def city_comparison():
    return _respond('city comparison data', queries.get_city_comparison_data)


@data_bp.route('/stats')
def stats():
    return _respond('stats', queries.get_stats,
                    state=request.args.get('state') or None,
                    suburb=request.args.get('suburb') or None)


@data_bp.route('/properties')
def properties():
    """
    Properties matching a MongoDB filter passed as JSON in ?query=.
    Malformed JSON is reported like any other failure.
    """
    def run(db):
        return queries.fetch_properties(db, json.loads(request.args.get('query') or '{}'))
    return _respond('properties', run, error_message='Failed to fetch properties')


@data_bp.route('/search')
def search():
    def run(db):
        return queries.search_properties(
            db,
            region=request.args.get('region', ''),
            min_price=parse_number(request.args.get('min'), 0),
            max_price=parse_number(request.args.get('max')),
        )
    return _respond('search results', run)
