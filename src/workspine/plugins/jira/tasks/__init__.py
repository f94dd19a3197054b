from workspine.plugins.jira.tasks.account_convertor import CONVERT_ACCOUNTS_META
from workspine.plugins.jira.tasks.board_convertor import CONVERT_BOARD_META
from workspine.plugins.jira.tasks.issue_convertor import CONVERT_ISSUES_META
from workspine.plugins.jira.tasks.task_data import JiraOptions

SUBTASK_METAS = [
    CONVERT_BOARD_META,
    CONVERT_ISSUES_META,
    CONVERT_ACCOUNTS_META,
]

__all__ = ["SUBTASK_METAS", "JiraOptions"]
