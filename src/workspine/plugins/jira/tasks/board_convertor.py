from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.domain.ticket import Board
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.jira.models import JiraBoard
from workspine.plugins.jira.tasks.task_data import RAW_BOARD_TABLE, JiraOptions


@dataclass
class BoardTransform:
    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(JiraBoard))

    def __call__(self, board: JiraBoard) -> list[Board]:
        return [
            Board(
                id=self.board_id_gen.generate(board.connection_id, board.board_id),
                name=board.name,
                url=board.url,
                type=board.type,
            )
        ]


def convert_board(ctx: SubtaskContext) -> ConversionResult:
    options: JiraOptions = ctx.data
    settings = get_settings()
    converter = DataConverter(
        ctx.dal,
        select(JiraBoard).where(
            JiraBoard.connection_id == options.connection_id,
            JiraBoard.board_id == options.board_id,
        ),
        BoardTransform(),
        raw_table=RAW_BOARD_TABLE,
        raw_params={"ConnectionId": options.connection_id, "BoardId": options.board_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_BOARD_META = SubtaskMeta(
    name="convertBoard",
    entry_point=convert_board,
    description="convert Jira board",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
