from flask import Blueprint, jsonify, request

from models import db
from models.audit_log import AuditLog
from reservations.ledger import ReservationLedger
from security.rbac import require_roles

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.get("/bookings/stats")
@require_roles("ADMIN")
def booking_stats():
    count, revenue = ReservationLedger(db.session).confirmed_totals()
    return jsonify(confirmed_bookings=count, total_revenue=revenue), 200


@admin_bp.get("/audit-logs")
@require_roles("ADMIN")
def list_audit_logs():
    limit = request.args.get("limit", type=int) or 200
    limit = max(1, min(limit, 500))

    action = request.args.get("action")
    user_id = request.args.get("user_id", type=int)

    q = AuditLog.query
    if action:
        q = q.filter(AuditLog.action == action)
    if user_id is not None:
        q = q.filter(AuditLog.user_id == user_id)

    rows = q.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
    return jsonify([
        {
            "id": r.id,
            "created_at": r.timestamp.isoformat() if r.timestamp else None,
            "user_id": r.user_id,
            "action": r.action,
            "entity": r.entity,
            "entity_id": r.entity_id,
            "ip": r.ip,
            "metadata": r.metadata_json,
        } for r in rows
    ]), 200
