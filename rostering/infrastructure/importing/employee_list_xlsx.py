"""
Employee list import from ``.xlsx`` workbooks.

The first worksheet holds one employee per row under a header row::

    Name        | Skills               | Short ID | Color
    Amy Cole    | Nursing, Triage      | AC       | #A1C4FD
    Beth Fox    | Nursing              |          |

Only ``Name`` is required. The whole sheet is parsed before anything is
written, so a malformed file leaves the database untouched.
"""

import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, BinaryIO, TypeVar

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from rostering.application.dtos import EmployeeView
from rostering.core.config import settings
from rostering.core.observability import IMPORTED_EMPLOYEES, get_logger
from rostering.domain.shared.exceptions import ImportFormatError
from rostering.domain.shared.validation import HEX_COLOR
from rostering.models import Contract, Skill

logger = get_logger(__name__)

Named = TypeVar("Named")

NAME_HEADER = "name"
SKILLS_HEADER = "skills"
SHORT_ID_HEADER = "short id"
COLOR_HEADER = "color"

DEFAULT_COLORS = (
    "#A1C4FD",
    "#FDCB6E",
    "#81ECEC",
    "#FAB1A0",
    "#A29BFE",
    "#55EFC4",
    "#FF7675",
    "#74B9FF",
    "#FFEAA7",
    "#DFE6E9",
)


@dataclass(frozen=True)
class EmployeeListRow:
    """One parsed worksheet row."""

    row_number: int
    name: str
    skill_names: list[str] = field(default_factory=list)
    short_id: str | None = None
    color: str | None = None


def deduplicate_by_name(records: Iterable[Named]) -> list[Named]:
    """Keep the first record of every case-insensitive name, in encounter order."""
    seen: set[str] = set()
    unique = []
    for record in records:
        key = record.name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def default_short_id(name: str) -> str:
    """Upper-cased initials of up to three words of ``name``."""
    return "".join(word[0] for word in name.split()[:3]).upper()


def _cell_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


class EmployeeListXlsxReader:
    """
    Reads employee views from an ``.xlsx`` employee list.

    Skills are matched by name within the tenant and created when unknown.
    Every view references the tenant's default contract, which is created on
    first use.
    """

    def __init__(
        self, max_rows: int | None = None, default_contract_name: str | None = None
    ):
        self.max_rows = max_rows or settings.IMPORT_MAX_ROWS
        self.default_contract_name = (
            default_contract_name or settings.DEFAULT_CONTRACT_NAME
        )

    def get_employee_list_from_excel_file(
        self, uow, tenant_id: int, stream: BinaryIO
    ) -> list[EmployeeView]:
        """
        Parse the workbook and resolve its skills and contract.

        Rows repeating an earlier name (case-insensitively) are dropped before
        any skill or contract is looked up or created.

        Args:
            uow: Active unit of work of the import
            tenant_id: Tenant receiving the employees
            stream: Binary stream of the workbook

        Returns:
            One view per distinct name, in sheet order

        Raises:
            ImportFormatError: If the workbook cannot be read
        """
        parsed = self.read_rows(stream)
        rows = deduplicate_by_name(parsed)
        duplicates = len(parsed) - len(rows)
        if not rows:
            return []

        contract = self._default_contract(uow, tenant_id)
        skills: dict[str, Skill] = {}
        views = []
        for index, row in enumerate(rows):
            skill_ids = []
            for skill_name in row.skill_names:
                if skill_name not in skills:
                    skills[skill_name] = self._skill(uow, tenant_id, skill_name)
                skill_ids.append(skills[skill_name].id)

            views.append(
                EmployeeView(
                    tenant_id=tenant_id,
                    name=row.name,
                    contract_id=contract.id,
                    skill_proficiency_ids=skill_ids,
                    short_id=row.short_id or default_short_id(row.name),
                    color=row.color or DEFAULT_COLORS[index % len(DEFAULT_COLORS)],
                )
            )

        IMPORTED_EMPLOYEES.labels(outcome="skipped").inc(duplicates)
        logger.info(
            "Employee list read",
            tenant_id=tenant_id,
            rows=len(views),
            duplicates=duplicates,
            skills=len(skills),
        )
        return views

    def read_rows(self, stream: BinaryIO) -> list[EmployeeListRow]:
        """
        Parse the first worksheet without touching the database.

        Raises:
            ImportFormatError: If the workbook is unreadable, has no ``Name``
                column, holds a malformed row or too many rows
        """
        try:
            workbook = load_workbook(stream, read_only=True, data_only=True)
        except (
            InvalidFileException,
            zipfile.BadZipFile,
            KeyError,
            OSError,
            ValueError,
        ) as e:
            raise ImportFormatError(
                f"Employee list is not a readable workbook: {e}"
            ) from e

        try:
            sheet_rows = workbook.worksheets[0].iter_rows(values_only=True)
            header = next(sheet_rows, None)
            if header is None:
                raise ImportFormatError("Employee list has no header row", row=1)
            columns = self._columns(header)

            rows = []
            for row_number, values in enumerate(sheet_rows, start=2):
                if all(_cell_text(value) is None for value in values):
                    continue
                if len(rows) >= self.max_rows:
                    raise ImportFormatError(
                        f"Employee list has more than {self.max_rows} rows",
                        row=row_number,
                    )
                rows.append(self._parse_row(row_number, values, columns))
            return rows
        finally:
            workbook.close()

    def _columns(self, header: tuple) -> dict[str, int]:
        columns: dict[str, int] = {}
        for index, value in enumerate(header):
            text = _cell_text(value)
            if text is not None:
                columns.setdefault(text.lower(), index)

        if NAME_HEADER not in columns:
            raise ImportFormatError("Employee list has no 'Name' column", row=1)
        return columns

    def _parse_row(
        self, row_number: int, values: tuple, columns: dict[str, int]
    ) -> EmployeeListRow:
        def text(header: str) -> str | None:
            index = columns.get(header)
            if index is None or index >= len(values):
                return None
            return _cell_text(values[index])

        name = text(NAME_HEADER)
        if name is None:
            raise ImportFormatError(
                "Employee name is blank", row=row_number, column="Name"
            )

        skill_names = []
        for skill_name in (text(SKILLS_HEADER) or "").split(","):
            skill_name = skill_name.strip()
            if not skill_name or skill_name in skill_names:
                continue
            if len(skill_name) > 120:
                raise ImportFormatError(
                    "Skill name is longer than 120 characters",
                    row=row_number,
                    column="Skills",
                )
            skill_names.append(skill_name)

        color = text(COLOR_HEADER)
        if color is not None and not HEX_COLOR.match(color):
            raise ImportFormatError(
                f"Color '{color}' is not a #RRGGBB color",
                row=row_number,
                column="Color",
            )

        return EmployeeListRow(
            row_number=row_number,
            name=name,
            skill_names=skill_names,
            short_id=text(SHORT_ID_HEADER),
            color=color,
        )

    def _skill(self, uow, tenant_id: int, name: str) -> Skill:
        skill = uow.skills.find_by_name(tenant_id, name)
        if skill is None:
            skill = uow.skills.save(Skill(tenant_id=tenant_id, name=name))
            logger.info(
                "Skill created by import", tenant_id=tenant_id, skill_id=skill.id
            )
        return skill

    def _default_contract(self, uow, tenant_id: int) -> Contract:
        contract = uow.contracts.find_by_name(tenant_id, self.default_contract_name)
        if contract is None:
            contract = uow.contracts.save(
                Contract(tenant_id=tenant_id, name=self.default_contract_name)
            )
            logger.info(
                "Default contract created by import",
                tenant_id=tenant_id,
                contract_id=contract.id,
            )
        return contract
