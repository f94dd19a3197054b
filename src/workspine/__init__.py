"""
Workspine - normalization core for work-tracking data.

Tool-specific rows (jira boards and issues, zentao projects, stories and
tasks) are converted into one canonical ticket domain, and blueprints of
selected scopes are turned into executable pipeline plans.

- workspine.core: IDs, errors, logging, settings, storage
- workspine.domain: Canonical domain tables
- workspine.framework: Converter, scope-config resolver, planner, plugins
- workspine.plugins.*: Tool plugins
"""

__version__ = "0.1.0"
