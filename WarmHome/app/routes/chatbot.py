import logging
from flask import Blueprint, request, jsonify
from WarmHome.app.services import get_or_create_orchestrator
from WarmHome.legal_assistant.orchestrator import MessageNotFound
from WarmHome.legal_assistant.translations import normalize_language, quick_questions, translate

logger = logging.getLogger(__name__)

# Create the Blueprint
chatbot_bp = Blueprint('chatbot', __name__, url_prefix='/api/chat')


def _invalid_request(error):
    return jsonify({
        'error': error,
        'status': 'invalid_request'
    }), 400


def _session_inactive(orchestrator):
    return jsonify({
        'error': 'Chat session is not active',
        'status': 'session_inactive',
        'notice': translate('session_ended', orchestrator.language)
    }), 409


def _busy():
    return jsonify({
        'error': 'Still answering the previous question',
        'status': 'busy'
    }), 409


def _session_payload(orchestrator, **extra):
    payload = {'status': 'success'}
    payload.update(orchestrator.snapshot())
    payload.update(extra)
    return jsonify(payload)


def _optional_string(data, key):
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


@chatbot_bp.route('/start', methods=['POST'])
def start_chat():
    """
    Open the chat panel: resume the running session or start a new one
    when the previous one ended.
    """
    data = request.get_json(silent=True) or {}
    try:
        language = _optional_string(data, 'language')
    except ValueError as e:
        return _invalid_request(str(e))

    orchestrator = get_or_create_orchestrator(language)
    orchestrator.refresh()
    if language:
        orchestrator.change_language(language)
    if not orchestrator.is_active:
        orchestrator.new_chat()
    return _session_payload(orchestrator)


@chatbot_bp.route('/new', methods=['POST'])
def new_chat():
    orchestrator = get_or_create_orchestrator()
    orchestrator.new_chat()
    return _session_payload(orchestrator)


@chatbot_bp.route('/session', methods=['GET'])
def get_session():
    """Current transcript, with expiry and due follow-ups applied."""
    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    return _session_payload(orchestrator)


@chatbot_bp.route('/message', methods=['POST'])
def send_message():
    """
    Handle a question sent to the legal assistant
    """
    try:
        data = request.get_json(silent=True)
        if not data or 'message' not in data:
            return _invalid_request('No message provided')

        message = data['message']
        if not isinstance(message, str) or not message.strip():
            return _invalid_request('Message cannot be empty')

        try:
            question_id = _optional_string(data, 'question_id')
        except ValueError as e:
            return _invalid_request(str(e))

        orchestrator = get_or_create_orchestrator()
        orchestrator.refresh()
        if not orchestrator.is_active:
            return _session_inactive(orchestrator)

        if orchestrator.is_typing:
            return _busy()

        reply = orchestrator.send_message(message, question_id=question_id)
        if reply is None:
            # Still active means another reply was in flight or replaced this one.
            if orchestrator.is_active:
                return _busy()
            return _session_inactive(orchestrator)

        follow_ups = orchestrator.run_due_follow_ups()
        return jsonify({
            'status': 'success',
            'reply': reply.to_dict(),
            'follow_ups': [m.to_dict() for m in follow_ups],
            'user_context': orchestrator.session.user_context.to_dict(),
            'pending_follow_ups': len(orchestrator.pending_follow_ups),
            'volunteer_offer_open': orchestrator.volunteer_offer_open
        })

    except Exception as e:
        logger.exception("Chat message processing error")
        return jsonify({
            'error': f'Error processing message: {str(e)}',
            'status': 'processing_error'
        }), 500


@chatbot_bp.route('/feedback', methods=['POST'])
def submit_feedback():
    data = request.get_json(silent=True) or {}
    message_id = data.get('message_id')
    helpful = data.get('helpful')
    if not isinstance(message_id, str) or not message_id:
        return _invalid_request('No message_id provided')
    if not isinstance(helpful, bool):
        return _invalid_request("'helpful' must be true or false")

    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    if not orchestrator.is_active:
        return _session_inactive(orchestrator)

    try:
        reply = orchestrator.submit_feedback(message_id, helpful)
    except MessageNotFound as e:
        return jsonify({'error': str(e), 'status': 'not_found'}), 404

    if reply is None:
        return jsonify({
            'error': 'This answer has already been rated',
            'status': 'already_rated'
        }), 409

    return jsonify({
        'status': 'success',
        'reply': reply.to_dict(),
        'volunteer_offer_open': orchestrator.volunteer_offer_open
    })


@chatbot_bp.route('/volunteer', methods=['POST'])
def connect_volunteer():
    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    if not orchestrator.is_active:
        return _session_inactive(orchestrator)

    message = orchestrator.connect_volunteer()
    if message is None:
        return jsonify({'status': 'already_connected'})
    return jsonify({'status': 'success', 'message': message.to_dict()})


@chatbot_bp.route('/volunteer/dismiss', methods=['POST'])
def dismiss_volunteer():
    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    if not orchestrator.dismiss_volunteer_offer():
        return _session_inactive(orchestrator)
    return jsonify({'status': 'success'})


@chatbot_bp.route('/language', methods=['POST'])
def change_language():
    data = request.get_json(silent=True) or {}
    language = data.get('language')
    if not isinstance(language, str) or not language:
        return _invalid_request('No language provided')

    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    if not orchestrator.change_language(language):
        return _session_inactive(orchestrator)
    return _session_payload(orchestrator)


@chatbot_bp.route('/activity', methods=['POST'])
def record_activity():
    """Typing, focus, scroll and modal events keep the session alive."""
    data = request.get_json(silent=True) or {}
    try:
        kind = _optional_string(data, 'kind') or 'interaction'
    except ValueError as e:
        return _invalid_request(str(e))

    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    if not orchestrator.record_activity(kind):
        return _session_inactive(orchestrator)
    return jsonify({
        'status': 'success',
        'time_left_seconds': int(orchestrator.lifecycle.time_left().total_seconds())
    })


@chatbot_bp.route('/end', methods=['POST'])
def end_chat():
    orchestrator = get_or_create_orchestrator()
    orchestrator.refresh()
    message = orchestrator.end_session()
    if message is None:
        return _session_inactive(orchestrator)
    return jsonify({'status': 'success', 'message': message.to_dict()})


@chatbot_bp.route('/quick-questions', methods=['GET'])
def get_quick_questions():
    language = normalize_language(request.args.get('language', ''))
    return jsonify({'language': language, 'questions': quick_questions(language)})
