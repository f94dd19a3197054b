from workspine.plugins.jira.blueprint import make_pipeline_plan
from workspine.plugins.jira.impl import JiraPlugin

__all__ = ["JiraPlugin", "make_pipeline_plan"]
