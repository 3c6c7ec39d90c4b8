from cosense_rag.ask.prompts import SYSTEM_PROMPT
from cosense_rag.ask.schemas import AskResponse
from cosense_rag.export.formatter import page_url, title_from_filename
from cosense_rag.search.client import AISearchClient
from cosense_rag.search.schemas import SearchResult


class AskService:
    def __init__(
        self,
        *,
        search_client: AISearchClient,
        project_name: str,
        base_url: str,
        max_results: int = 5,
        sources_heading: str = "Sources",
        deduplicate_sources: bool = False,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.search_client = search_client
        self.project_name = project_name
        self.base_url = base_url
        self.max_results = max_results
        self.sources_heading = sources_heading
        self.deduplicate_sources = deduplicate_sources
        self.system_prompt = system_prompt

    def _format_sources(self, results: list[SearchResult]) -> str:
        titles = [title_from_filename(result.filename) for result in results]
        if self.deduplicate_sources:
            titles = list(dict.fromkeys(titles))

        return "\n".join(
            f"- [{title}]({page_url(self.base_url, self.project_name, title)})"
            for title in titles
        )

    async def ask(self, question: str) -> AskResponse:
        result = await self.search_client.search(
            query=question,
            stream=False,
            max_num_results=self.max_results,
            system_prompt=self.system_prompt,
        )

        response = result.response
        if result.has_more and result.next_page:
            response += result.next_page

        sources = self._format_sources(result.data)
        return AskResponse(
            answer=f"{response}\n\n## {self.sources_heading}\n{sources}"
        )
