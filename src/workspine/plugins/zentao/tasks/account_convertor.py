from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.domain.crossdomain import Account
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_CROSS
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.zentao.models import ZentaoAccount
from workspine.plugins.zentao.tasks.task_data import RAW_ACCOUNT_TABLE, ZentaoOptions


@dataclass
class AccountTransform:
    account_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoAccount))

    def __call__(self, account: ZentaoAccount) -> list[Account]:
        return [
            Account(
                id=self.account_id_gen.generate(account.connection_id, account.id),
                user_name=account.account,
                full_name=account.realname,
                email=account.email,
                avatar_url=account.avatar,
                # 0 active, 1 deleted
                status=1 if account.deleted else 0,
            )
        ]


def convert_account(ctx: SubtaskContext) -> ConversionResult:
    options: ZentaoOptions = ctx.data
    settings = get_settings()
    converter = DataConverter(
        ctx.dal,
        select(ZentaoAccount)
        .where(ZentaoAccount.connection_id == options.connection_id)
        .order_by(ZentaoAccount.id),
        AccountTransform(),
        raw_table=RAW_ACCOUNT_TABLE,
        raw_params={"ConnectionId": options.connection_id, "ProjectId": options.project_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_ACCOUNT_META = SubtaskMeta(
    name="convertAccount",
    entry_point=convert_account,
    description="convert Zentao account",
    domain_types=(DOMAIN_TYPE_CROSS,),
)
