from shophub.models import storage

from . import admin_required, bp
from .schemas import DashboardStatsOut, dump


@bp.route("/dashboard/stats")
@admin_required
def dashboard_stats():
    return dump(DashboardStatsOut, storage.get_dashboard_stats())
