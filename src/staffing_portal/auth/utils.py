"""Authentication utilities."""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
import hashlib
import os
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.config import settings
from .models import AdminUser, RevokedToken, Role, TokenData

logger = structlog.get_logger(__name__)


def _is_testing() -> bool:
    return os.getenv("TESTING", "false").lower() in ("1", "true")


def get_pwd_context():
    """Get password context based on environment."""
    if _is_testing():
        return CryptContext(schemes=["plaintext"], deprecated="auto")
    else:
        return CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    if not _is_testing() and len(plain_password.encode("utf-8")) > 72:
        plain_password = hashlib.sha256(plain_password.encode("utf-8")).hexdigest()
    return get_pwd_context().verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password with SHA-256 pre-hashing for long passwords.

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    pwd_context = get_pwd_context()

    # Plaintext scheme under test
    if _is_testing():
        return pwd_context.hash(password)

    # Pre-hash with SHA-256 if password exceeds bcrypt's 72-byte limit
    if len(password.encode('utf-8')) > 72:
        password = hashlib.sha256(password.encode('utf-8')).hexdigest()

    return pwd_context.hash(password)


def create_access_token(
    subject_id: UUID,
    role: Role,
    name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token with a JTI so it can be revoked on logout.

    Args:
        subject_id: Admin user id or client id
        role: Role carried by the token
        name: Display name (username or company name)
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

    jti = str(uuid.uuid4())
    to_encode = {
        "sub": str(subject_id),
        "role": role.value,
        "name": name,
        "exp": expire,
        "jti": jti,
        "iat": datetime.utcnow(),
    }

    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    logger.debug("Access token created", expires_at=expire.isoformat(), jti=jti, role=role.value)
    return encoded_jwt


def verify_token(token: str) -> Optional[TokenData]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])

        subject: Optional[str] = payload.get("sub")
        role: Optional[str] = payload.get("role")

        if subject is None or role is None:
            logger.warning("Token missing subject or role")
            return None

        exp = payload.get("exp")

        token_data = TokenData(
            subject_id=UUID(subject),
            role=Role(role),
            jti=payload.get("jti"),
            name=payload.get("name"),
            expires_at=datetime.utcfromtimestamp(exp) if exp else None,
        )

        logger.debug("Token verified successfully", subject_id=subject, role=role)
        return token_data

    except JWTError as e:
        logger.warning("Token verification failed", error=str(e))
        return None
    except ValueError as e:
        logger.warning("Invalid subject or role in token", error=str(e))
        return None


def is_token_revoked(db: Session, jti: Optional[str]) -> bool:
    """Check whether a token id has been logged out."""
    if not jti:
        return False
    return db.query(RevokedToken).filter(RevokedToken.jti == jti).first() is not None


def revoke_token(db: Session, jti: str, expires_at: Optional[datetime] = None) -> None:
    """Record a token id as logged out.

    Args:
        db: Database session
        jti: Token id
        expires_at: Natural expiry of the token, kept for cleanup
    """
    if is_token_revoked(db, jti):
        return

    db.add(RevokedToken(jti=jti, expires_at=expires_at))
    db.commit()
    logger.info("Token revoked", jti=jti)


def authenticate_admin(db: Session, username: str, password: str) -> Optional[AdminUser]:
    """Authenticate an admin with username and password.

    Args:
        db: Database session
        username: Admin username
        password: Plain text password

    Returns:
        AdminUser if authentication successful, None otherwise
    """
    user = db.query(AdminUser).filter(AdminUser.username == username).first()

    if not user:
        logger.warning("Admin user not found", username=username)
        return None

    if not user.is_active:
        logger.warning("Admin user is inactive", username=username)
        return None

    if not user.is_admin:
        logger.warning("User lacks admin access", username=username)
        return None

    if not verify_password(password, user.hashed_password):
        logger.warning("Invalid password", username=username)
        return None

    logger.info("Admin authenticated successfully", username=username, user_id=str(user.id))
    return user


def get_admin_by_id(db: Session, user_id: UUID) -> Optional[AdminUser]:
    """Get an active admin user by ID."""
    return db.query(AdminUser).filter(AdminUser.id == user_id, AdminUser.is_active == True).first()


def create_admin_user(db: Session, username: str, password: str) -> AdminUser:
    """Create a new admin user.

    Args:
        db: Database session
        username: Login name
        password: Plain text password

    Returns:
        Created admin user
    """
    db_user = AdminUser(
        username=username,
        hashed_password=get_password_hash(password),
        is_admin=True,
        is_active=True,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    logger.info("Admin user created", username=username, user_id=str(db_user.id))
    return db_user
