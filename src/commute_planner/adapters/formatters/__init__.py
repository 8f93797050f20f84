"""Plan formatters."""

from commute_planner.adapters.formatters.plan_formatter import PlanFormatter, plan_to_dict

__all__ = ["PlanFormatter", "plan_to_dict"]
