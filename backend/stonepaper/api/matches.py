from flask import Blueprint, current_app, jsonify, request

from stonepaper.services.history import recent_matches


matches = Blueprint('matches', __name__)


@matches.route('', methods=['GET'])
def list_matches():
    page_size = int(current_app.config.get('HISTORY_PAGE_SIZE', 20))
    try:
        limit = int(request.args.get('limit', page_size))
    except ValueError:
        limit = page_size
    limit = max(1, min(limit, page_size))
    return jsonify([m.to_dict() for m in recent_matches(limit)])
