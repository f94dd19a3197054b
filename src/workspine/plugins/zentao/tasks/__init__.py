from workspine.plugins.zentao.tasks.account_convertor import CONVERT_ACCOUNT_META
from workspine.plugins.zentao.tasks.execution_convertor import CONVERT_EXECUTIONS_META
from workspine.plugins.zentao.tasks.project_convertor import CONVERT_PROJECTS_META
from workspine.plugins.zentao.tasks.story_convertor import CONVERT_STORY_META
from workspine.plugins.zentao.tasks.task_convertor import CONVERT_TASK_META
from workspine.plugins.zentao.tasks.task_data import ZentaoOptions

SUBTASK_METAS = [
    CONVERT_PROJECTS_META,
    CONVERT_EXECUTIONS_META,
    CONVERT_STORY_META,
    CONVERT_TASK_META,
    CONVERT_ACCOUNT_META,
]

__all__ = ["SUBTASK_METAS", "ZentaoOptions"]
