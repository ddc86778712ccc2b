from flask import Blueprint

from controllers.auth_helpers import auth_required
from services.notification_service import NotificationService
from utils.exceptions import BizError
from utils.permissions import get_current_identity
from utils.response import json_response

notification_bp = Blueprint("notification", __name__, url_prefix="/api/notifications")


@notification_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(e.to_dict(), e.code)


@notification_bp.get("")
@auth_required()
def list_notifications():
    identity = get_current_identity()
    return json_response([n.to_dict() for n in NotificationService.list_for_user(identity.user_id)])


@notification_bp.put("/<notification_id>/read")
@auth_required()
def mark_read(notification_id):
    identity = get_current_identity()
    return json_response(NotificationService.mark_read(notification_id, identity.user_id).to_dict())


@notification_bp.delete("")
@auth_required()
def clear_notifications():
    NotificationService.clear(get_current_identity().user_id)
    return json_response({"msg": "Notifications cleared"})
