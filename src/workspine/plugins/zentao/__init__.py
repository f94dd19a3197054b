from workspine.plugins.zentao.blueprint import make_pipeline_plan
from workspine.plugins.zentao.impl import ZentaoPlugin

__all__ = ["ZentaoPlugin", "make_pipeline_plan"]
