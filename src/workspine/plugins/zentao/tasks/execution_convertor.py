from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.domain.ticket import Board
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.zentao.models import ZentaoExecution
from workspine.plugins.zentao.tasks.task_data import RAW_EXECUTION_TABLE, ZentaoOptions


@dataclass
class ExecutionTransform:
    """Executions (sprints) become boards of their own."""

    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoExecution))

    def __call__(self, execution: ZentaoExecution) -> list[Board]:
        return [
            Board(
                id=self.board_id_gen.generate(execution.connection_id, execution.id),
                name=execution.name,
                description=execution.description,
                url=execution.url,
                type=execution.type,
                created_date=execution.opened_date,
            )
        ]


def convert_executions(ctx: SubtaskContext) -> ConversionResult:
    options: ZentaoOptions = ctx.data
    settings = get_settings()
    converter = DataConverter(
        ctx.dal,
        select(ZentaoExecution)
        .where(
            ZentaoExecution.project == options.project_id,
            ZentaoExecution.connection_id == options.connection_id,
        )
        .order_by(ZentaoExecution.id),
        ExecutionTransform(),
        raw_table=RAW_EXECUTION_TABLE,
        raw_params={"ConnectionId": options.connection_id, "ProjectId": options.project_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_EXECUTIONS_META = SubtaskMeta(
    name="convertExecutions",
    entry_point=convert_executions,
    description="convert Zentao executions",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
