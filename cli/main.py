import asyncio
import uuid
from datetime import UTC, datetime

import typer
import uvicorn

from backend.app.config import settings

app = typer.Typer(help="Threadboard - discussion threads within channels")


@app.command()
def start(reload: bool = typer.Option(False, help="Reload on code changes.")) -> None:
    """Start the Threadboard server."""
    typer.echo(f"Starting Threadboard on {settings.host}:{settings.port}...")
    uvicorn.run(
        "backend.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
    )


@app.command("create-user")
def create_user(
    name: str,
    admin: bool = typer.Option(False, "--admin", help="Grant moderation rights."),
) -> None:
    """Register a user and print their API token."""
    from backend.app.api.users import register_user
    from backend.app.db import async_session, init_db

    async def _run() -> str:
        await init_db()
        async with async_session() as session:
            user = await register_user(session, name, is_admin=admin)
            await session.commit()
            return user.api_token

    token = asyncio.run(_run())
    typer.echo(f"Created {name}. API token: {token}")


@app.command("create-channel")
def create_channel(name: str) -> None:
    """Create a channel."""
    from backend.app.api.channels import RESERVED_SLUGS, slugify
    from backend.app.db import async_session, init_db
    from backend.app.models.channel import Channel

    slug = slugify(name)
    if not slug or slug in RESERVED_SLUGS:
        typer.echo(f"Cannot use {name!r} as a channel name", err=True)
        raise typer.Exit(code=1)

    async def _run() -> str:
        await init_db()
        async with async_session() as session:
            channel = Channel(
                id=str(uuid.uuid4()),
                name=name,
                slug=slug,
                archived=False,
                created_at=datetime.now(UTC).isoformat(),
            )
            session.add(channel)
            await session.commit()
            return channel.slug

    slug = asyncio.run(_run())
    typer.echo(f"Created channel /threads/{slug}")


if __name__ == "__main__":
    app()
