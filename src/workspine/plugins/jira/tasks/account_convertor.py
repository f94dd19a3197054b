from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.domain.crossdomain import Account
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_CROSS
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.jira.models import JiraAccount
from workspine.plugins.jira.tasks.task_data import RAW_ACCOUNT_TABLE, JiraOptions


@dataclass
class AccountTransform:
    account_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(JiraAccount))

    def __call__(self, account: JiraAccount) -> list[Account]:
        return [
            Account(
                id=self.account_id_gen.generate(account.connection_id, account.account_id),
                user_name=account.name,
                full_name=account.name,
                email=account.email,
                avatar_url=account.avatar_url,
            )
        ]


def convert_accounts(ctx: SubtaskContext) -> ConversionResult:
    options: JiraOptions = ctx.data
    settings = get_settings()
    converter = DataConverter(
        ctx.dal,
        select(JiraAccount)
        .where(JiraAccount.connection_id == options.connection_id)
        .order_by(JiraAccount.account_id),
        AccountTransform(),
        raw_table=RAW_ACCOUNT_TABLE,
        raw_params={"ConnectionId": options.connection_id, "BoardId": options.board_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_ACCOUNTS_META = SubtaskMeta(
    name="convertAccounts",
    entry_point=convert_accounts,
    description="convert Jira accounts",
    domain_types=(DOMAIN_TYPE_CROSS,),
)
