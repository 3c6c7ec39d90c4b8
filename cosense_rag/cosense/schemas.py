from pydantic import BaseModel


class PageSummary(BaseModel):
    title: str
    created: int
    updated: int
    views: int = 0


class PageList(BaseModel):
    count: int
    pages: list[PageSummary]


class PageLine(BaseModel):
    text: str


class PageDetail(BaseModel):
    lines: list[PageLine]

    @property
    def body(self) -> str:
        return "\n".join(line.text for line in self.lines)
