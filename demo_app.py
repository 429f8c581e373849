"""Demo FastAPI application with duplicatable admin screens.

Posts are duplicated through the new form; invoices, whose line items are
not part of any form, are duplicated by saving the copy directly.

Run with: python demo_app.py
Then try:
    curl http://localhost:8000/posts/1
    curl -i http://localhost:8000/invoices/1/duplicate
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware

from admin_duplicatable import AdminScreen, duplicatable
from admin_duplicatable.core.copier import ModelDeepCopier
from admin_duplicatable.observability.logging import configure_logging
from admin_duplicatable.storage.memory import MemoryRecordStore

configure_logging(level="INFO", json_output=False)


class Post(BaseModel):
    id: Optional[int] = None
    title: str
    body: str = ""
    tags: list[str] = []


class LineItem(BaseModel):
    id: Optional[int] = None
    description: str
    amount_cents: int


class Invoice(BaseModel):
    id: Optional[int] = None
    number: str
    customer: str
    line_items: list[LineItem] = []


def copy_title(post: Post) -> Post:
    post.title = f"{post.title} (copy)"
    return post


def next_invoice_number(invoice: Invoice) -> Invoice:
    invoice.number = f"{invoice.number}-COPY"
    return invoice


post_store = MemoryRecordStore(name="posts")
# Invoices with a blank number are rejected by the store
invoice_store = MemoryRecordStore(name="invoices", validator=lambda invoice: bool(invoice.number))


@asynccontextmanager
async def lifespan(app: FastAPI):
    await post_store.save(Post(title="Hello", body="First post", tags=["intro"]))
    await invoice_store.save(
        Invoice(
            number="INV-001",
            customer="ACME",
            line_items=[LineItem(description="Consulting", amount_cents=150000)],
        )
    )
    yield


app = FastAPI(
    title="Duplicatable Admin Demo",
    description="Admin screens with duplicate actions",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(SessionMiddleware, secret_key="demo-secret-change-me")

posts = AdminScreen(Post, post_store)
duplicatable(posts, copier=ModelDeepCopier(tweak=copy_title))
posts.mount(app)

invoices = AdminScreen(Invoice, invoice_store)
duplicatable(invoices, via="save", copier=ModelDeepCopier(tweak=next_invoice_number))
invoices.mount(app)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
