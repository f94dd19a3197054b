from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.domain.ticket import Board
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.zentao.models import ZentaoProject
from workspine.plugins.zentao.tasks.task_data import RAW_PROJECT_TABLE, ZentaoOptions


@dataclass
class ProjectTransform:
    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoProject))

    def __call__(self, project: ZentaoProject) -> list[Board]:
        return [
            Board(
                id=self.board_id_gen.generate(project.connection_id, project.id),
                name=project.name,
                description=project.description,
                url=project.url,
                type=project.type,
                created_date=project.opened_date,
            )
        ]


def convert_projects(ctx: SubtaskContext) -> ConversionResult:
    options: ZentaoOptions = ctx.data
    settings = get_settings()
    converter = DataConverter(
        ctx.dal,
        select(ZentaoProject).where(
            ZentaoProject.id == options.project_id,
            ZentaoProject.connection_id == options.connection_id,
        ),
        ProjectTransform(),
        raw_table=RAW_PROJECT_TABLE,
        raw_params={"ConnectionId": options.connection_id, "ProjectId": options.project_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_PROJECTS_META = SubtaskMeta(
    name="convertProjects",
    entry_point=convert_projects,
    description="convert Zentao project",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
