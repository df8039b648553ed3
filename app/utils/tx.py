from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession

@asynccontextmanager
async def commit_scope(session: AsyncSession):
    """
    Ejecuta el bloque en una transacción y la confirma al salir.
    Si la sesión ya autoinició una transacción, se reutiliza y también se confirma.
    Cualquier salida anómala (incluida la cancelación del request) hace rollback.
    """
    if not session.in_transaction():
        await session.begin()
    try:
        yield
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
