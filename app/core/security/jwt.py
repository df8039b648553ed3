import json
from dataclasses import dataclass
from typing import Any, Dict
from jose import jwt as jose_jwt, JWTError, ExpiredSignatureError
from jose.utils import base64url_decode
from app.core.logger import logger

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenConfig:
    """Parametros de verificacion; se construye desde settings en el contenedor."""
    secret: str
    issuer: str
    audience: str


def _b64json(part: str) -> Dict[str, Any]:
    padded = part + "=" * (-len(part) % 4)
    return json.loads(base64url_decode(padded.encode()).decode("utf-8"))


def verify_token(token: str, config: TokenConfig) -> Dict[str, Any]:
    """
    Verify an HS256 bearer token and return its claims.

    Raises:
        ValueError: malformed, expired or badly signed token, or wrong issuer/audience.
    """
    try:
        header_b64, _, _ = token.split(".")
        header = _b64json(header_b64)
    except (ValueError, UnicodeDecodeError):
        raise ValueError("token malformado")

    alg = str(header.get("alg", ""))
    logger.debug("[JWT] verify alg=%s", alg)
    if alg.upper() != _ALGORITHM:
        raise ValueError(f"algoritmo no soportado: {alg}")

    try:
        claims = jose_jwt.decode(
            token,
            config.secret,
            algorithms=[_ALGORITHM],
            audience=config.audience,
            issuer=config.issuer,
        )
    except ExpiredSignatureError:
        raise ValueError("token expirado")
    except JWTError as e:
        raise ValueError(str(e) or "token invalido")

    if not claims.get("sub"):
        raise ValueError("sub faltante en token")
    return claims
