"""Command-line interface for copying linked records in a Bitable base.

The CLI is a hydra-zen application: every parameter is a config field and can
be overridden on the command line. Credentials default to the BITABLE_APP_ID
and BITABLE_APP_SECRET environment variables.

Usage:
    duplex-copy duplex_copy.app_token=bascnXXXX child_table_id=tblItems \\
        'record_ids=[recC1,recC2]' forward_field_id=fldItems target_record_id=recM2

    duplex-copy ... duplex_copy.logging_level=10   # DEBUG output

The result is printed as JSON; the exit code is 1 when the copy failed.
"""

import asyncio
import json
import sys

from hydra_zen import builds, store, zen

from duplex_copy.core.config import DuplexCopyConfig
from duplex_copy.core.logging_config import configure_logging
from duplex_copy.duplication.facade import copy_linked_records
from duplex_copy.duplication.results import CopyResult
from duplex_copy.service.bitable import BitableTableService

DuplexCopyConf = builds(
    DuplexCopyConfig,
    populate_full_signature=True,
    app_id="${oc.env:BITABLE_APP_ID,null}",
    app_secret="${oc.env:BITABLE_APP_SECRET,null}",
)


def copy_task(
    duplex_copy: DuplexCopyConfig,
    child_table_id: str,
    record_ids: list[str],
    forward_field_id: str,
    target_record_id: str,
) -> CopyResult:
    """Copy child records to a new anchor and print the result.

    Args:
        duplex_copy: Store connection and logging settings.
        child_table_id: Table holding the records to copy.
        record_ids: Records to copy.
        forward_field_id: Forward link field on the main table.
        target_record_id: Main-table record the copies should belong to.
    """
    configure_logging(level=duplex_copy.logging_level, library_level=duplex_copy.library_logging_level)
    service = BitableTableService.from_config(duplex_copy)
    try:
        result = asyncio.run(
            copy_linked_records(
                service,
                child_table_id,
                list(record_ids),
                forward_field_id,
                target_record_id,
                page_size=duplex_copy.page_size,
            )
        )
    finally:
        service.close()

    output = result.to_dict()
    output["record_ids"] = result.record_ids
    if result.verification is not None:
        output["verified"] = result.verification.verified
    print(json.dumps(output, indent=2))
    if not result.success:
        sys.exit(1)
    return result


CopyTaskConf = builds(copy_task, populate_full_signature=True, duplex_copy=DuplexCopyConf)
store(CopyTaskConf, name="duplex_copy_app")


def main() -> int:
    """Entry point for the duplex-copy console script."""
    store.add_to_hydra_store()
    zen(copy_task).hydra_main(config_name="duplex_copy_app", version_base="1.3", config_path=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
