import asyncio
import logging
from datetime import datetime, timezone

from cosense_rag.cosense.client import CosenseClient
from cosense_rag.cosense.schemas import PageSummary
from cosense_rag.document_store.base import ObjectStoreBackend
from cosense_rag.export.checkpoint import SyncCheckpointStore
from cosense_rag.export.formatter import format_document
from cosense_rag.export.schemas import SyncCheckpoint, SyncResult

logger = logging.getLogger(__name__)


class PageExportService:
    """Mirrors every page of a Cosense project into the object store."""

    def __init__(
        self,
        *,
        client: CosenseClient,
        object_store: ObjectStoreBackend,
        project_name: str,
        base_url: str,
        page_limit: int = 100,
        checkpoint_store: SyncCheckpointStore | None = None,
        run_id: str | None = None,
    ):
        self.client = client
        self.object_store = object_store
        self.project_name = project_name
        self.base_url = base_url
        self.page_limit = page_limit
        self.checkpoint_store = checkpoint_store
        self.run_id = run_id

    async def sync_all(self) -> SyncResult:
        """Main entry point for a sync run.

        Pages are listed in batches of `page_limit`; within a batch every page
        is exported concurrently (bounded by the client's semaphore) and the
        batch is awaited before moving on. The listing count is re-read on
        every call and bounds the loop.
        """
        logger.info(f"Syncing pages for project {self.project_name}")

        checkpoint = await self._load_checkpoint()
        start = checkpoint.skip if checkpoint else 0
        skip = start
        # Replaced by the count of the first listing
        total_count = checkpoint.total_count if checkpoint else 1
        exported = 0
        skipped = 0

        while skip < total_count:
            page_list = await self.client.list_pages(
                self.project_name, skip, self.page_limit
            )
            total_count = page_list.count

            if not page_list.pages:
                logger.warning(
                    f"Listing returned no pages at offset {skip} of {total_count}; stopping"
                )
                break

            results = await asyncio.gather(
                *(self._export_page(summary) for summary in page_list.pages)
            )
            exported += sum(1 for ok in results if ok)
            skipped += sum(1 for ok in results if not ok)

            skip += len(page_list.pages)
            await self._save_checkpoint(skip, total_count)
            logger.info(f"Progress: {skip} / {total_count}")

        await self._clear_checkpoint()

        return SyncResult(
            project=self.project_name,
            pages_processed=skip - start,
            pages_exported=exported,
            pages_skipped=skipped,
            message=f"Successfully synced {skip} pages.",
        )

    async def _export_page(self, summary: PageSummary) -> bool:
        try:
            detail = await self.client.fetch_page(self.project_name, summary.title)
            if detail is None:
                return False

            document = format_document(
                summary,
                detail,
                project=self.project_name,
                base_url=self.base_url,
            )
            await asyncio.to_thread(
                self.object_store.put_object, document.key, document.content
            )
            return True
        except Exception:
            logger.exception(f"Failed to process page: {summary.title}")
            return False

    async def _load_checkpoint(self) -> SyncCheckpoint | None:
        """Returns the stored offset only when this run wrote it.

        A redelivered task keeps its id, so it picks up where it stopped. Any
        other run starts from offset 0 and overwrites the stale checkpoint.
        """
        if not self.checkpoint_store:
            return None

        checkpoint = await asyncio.to_thread(
            self.checkpoint_store.load, self.project_name
        )
        if not checkpoint:
            return None

        if self.run_id is None or checkpoint.run_id != self.run_id:
            logger.info(
                f"Ignoring checkpoint of run {checkpoint.run_id} for project {self.project_name}"
            )
            return None

        logger.info(
            f"Resuming sync for project {self.project_name} at offset {checkpoint.skip}"
        )
        return checkpoint

    async def _save_checkpoint(self, skip: int, total_count: int) -> None:
        if not self.checkpoint_store:
            return

        checkpoint = SyncCheckpoint(
            project=self.project_name,
            run_id=self.run_id,
            skip=skip,
            total_count=total_count,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        await asyncio.to_thread(self.checkpoint_store.save, checkpoint)

    async def _clear_checkpoint(self) -> None:
        if not self.checkpoint_store:
            return
        await asyncio.to_thread(self.checkpoint_store.clear, self.project_name)
