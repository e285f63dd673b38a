from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for

from app.innovex.audit import record_event
from app.innovex.constants import ROLE_ADMIN, ROLES
from app.innovex.db import db_session
from app.innovex.models import AuditEvent, User
from app.innovex.rbac import require_admin, set_user_role, user_role

bp = Blueprint("admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/")
@require_admin
def index():
    from app.innovex.modules.applications.models import Application
    from app.innovex.modules.contacts.service import count_unread
    from app.innovex.modules.events.models import Event
    from app.innovex.modules.newsletter.service import count_active

    s = db_session()
    stats = {
        "events": s.query(Event).count(),
        "internships": s.query(Application).filter(Application.kind == "internship").count(),
        "unread_messages": count_unread(s),
        "active_subscribers": count_active(s),
    }
    recent = s.query(AuditEvent).order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(10).all()
    return render_template("admin/index.html", stats=stats, recent_events=recent, active_tab="overview")


@bp.get("/login")
def login_redirect():
    return redirect(url_for("auth.login_get"))


# ============================================================================
# TEAM / ROLES
# ============================================================================

@bp.get("/team")
@require_admin
def team_list():
    s = db_session()
    users = s.query(User).order_by(User.email.asc()).all()
    counts = {role: 0 for role in ROLES}
    counts["none"] = 0
    for u in users:
        counts[user_role(u) or "none"] += 1
    return render_template(
        "admin/team/list.html",
        users=users,
        roles=ROLES,
        role_counts=counts,
        user_role=user_role,
        active_tab="team",
    )


@bp.post("/team/<int:user_id>/role")
@require_admin
def team_set_role(user_id: int):
    s = db_session()
    u = _current_user()
    user = s.get(User, user_id)
    if not user:
        abort(404)

    raw = (request.form.get("role") or "").strip().lower()
    role = None if raw == "remove" else raw
    if role is not None and role not in ROLES:
        flash(f"Invalid role. Must be one of: {', '.join(ROLES)}", "danger")
        return redirect(url_for("admin.team_list"))

    if user.id == u.id and role != ROLE_ADMIN:
        flash("You cannot remove your own admin role.", "danger")
        return redirect(url_for("admin.team_list"))

    previous = set_user_role(s, user, role)
    record_event(
        s,
        actor=u,
        action="user.role_remove" if role is None else "user.role_set",
        entity_type="User",
        entity_id=str(user.id),
        metadata={"email": user.email, "before": previous, "after": role},
    )
    s.commit()
    if role is None:
        flash(f"Role removed for {user.email}.", "success")
    else:
        flash(f"{user.email} is now {role}.", "success")
    return redirect(url_for("admin.team_list"))
