"""JSON API for goals and habits.

Every endpoint works in the scope of the current owner: the signed-in user,
or the shared guest scope for anonymous visitors.
"""

from flask import request

from goalquest_app.core.error_handlers import NotFoundError, ValidationError, success_response
from goalquest_app.utils.time_utils import utcnow
from . import goals_api_bp
from .forms import GoalForm
from .interface import current_owner_id
from .logics.filters import GoalFilters, categories, filter_records
from .schemas import EDITABLE_FIELDS
from .services.goal_service import GoalService


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    return payload


def _validated_form(payload: dict) -> GoalForm:
    form = GoalForm.from_payload(payload)
    if not form.validate():
        raise ValidationError('Invalid goal', errors=form.errors)
    return form


@goals_api_bp.route('', methods=['GET'])
def list_goals():
    """List the owner's records with optional filters."""
    try:
        filters = GoalFilters.from_mapping(request.args)
    except ValueError as e:
        raise ValidationError(str(e))

    board = GoalService().load_board(current_owner_id())
    records = filter_records(board, filters)
    return success_response(data={
        'goals': [record.to_dict() for record in records],
        'categories': categories(board),
        'total': len(board),
    })


@goals_api_bp.route('', methods=['POST'])
def create_goal():
    form = _validated_form(_json_body())
    service = GoalService()
    board = service.load_board(current_owner_id())
    _, record = service.create_goal(board, now=utcnow(), **_creation_args(form))
    return success_response(data=record.to_dict(), message='Goal created'), 201


def _creation_args(form: GoalForm) -> dict:
    data = form.cleaned_data()
    if data['target_value'] is None:
        # Habits get their target from the habit rules
        data.pop('target_value')
    return data


@goals_api_bp.route('/<goal_id>', methods=['PATCH'])
def edit_goal(goal_id):
    payload = _json_body()
    service = GoalService()
    board = service.load_board(current_owner_id())
    if goal_id not in board:
        raise NotFoundError('Goal not found', resource=goal_id)
    record = board.get(goal_id)

    if 'habit_type' in payload and payload['habit_type'] != record.habit_type.value:
        raise ValidationError('The type of a record cannot be changed', errors={'habit_type': ['read only']})

    # Validate the merged state so partial updates pass the required checks
    merged = {
        'title': record.title,
        'description': record.description,
        'category': record.category,
        'habit_type': record.habit_type.value,
        'target_value': record.target_value,
        'unit': record.unit,
        'deadline': record.deadline.isoformat() if record.deadline else None,
        'xp_value': record.xp_value,
    }
    merged.update({name: value for name, value in payload.items() if name in EDITABLE_FIELDS})
    cleaned = _validated_form(merged).cleaned_data()

    changes = {name: cleaned[name] for name in EDITABLE_FIELDS if name in payload}
    _, updated = service.edit_goal(board, goal_id, changes)
    return success_response(data=updated.to_dict(), message='Goal updated')


@goals_api_bp.route('/<goal_id>', methods=['DELETE'])
def delete_goal(goal_id):
    service = GoalService()
    board = service.load_board(current_owner_id())
    service.delete_goal(board, goal_id)
    return success_response(message='Goal deleted')


@goals_api_bp.route('/<goal_id>/progress', methods=['POST'])
def update_progress(goal_id):
    payload = _json_body()
    if 'current_value' not in payload:
        raise ValidationError('current_value is required', errors={'current_value': ['missing']})

    service = GoalService()
    board = service.load_board(current_owner_id())
    _, outcome = service.update_progress(board, goal_id, payload['current_value'])
    message = outcome.notification.message if outcome.notification else None
    return success_response(data=outcome.to_dict(), message=message)


@goals_api_bp.route('/<goal_id>/toggle', methods=['POST'])
def toggle_goal(goal_id):
    service = GoalService()
    board = service.load_board(current_owner_id())
    _, outcome = service.toggle(board, goal_id, today=utcnow().date())
    message = outcome.notification.message if outcome.notification else None
    return success_response(data=outcome.to_dict(), message=message)


@goals_api_bp.route('/<goal_id>/completions', methods=['GET'])
def completion_history(goal_id):
    completions = GoalService().completion_history(current_owner_id(), goal_id)
    return success_response(data={
        'goal_id': goal_id,
        'completions': [completion.to_dict() for completion in completions],
    })
