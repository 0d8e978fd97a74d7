"""
Authentication Routes
Handles admin/citizen login, registration, and token checks
"""
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from pydantic import BaseModel
from datetime import timedelta
from jose import JWTError, jwt
from passlib.context import CryptContext
from typing import Optional, Union

from civiceye.config import settings
from civiceye.errors import Forbidden
from civiceye.models.admin import Admin, AdminRegister
from civiceye.models.citizen import Citizen, CitizenRegister
from civiceye.utils.dates import utcnow
from civiceye.utils.ids import parse_object_id


router = APIRouter()

ADMIN_ROLE = "admin"
CITIZEN_ROLE = "citizen"

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/citizen/login")
optional_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/citizen/login", auto_error=False
)


class Token(BaseModel):
    """Token response"""
    access_token: str
    token_type: str
    expires_in: int
    role: str


class TokenData(BaseModel):
    """Token payload data"""
    subject: Optional[str] = None
    role: Optional[str] = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def issue_token(account: Union[Admin, Citizen], role: str) -> dict:
    access_token = create_access_token(data={"sub": str(account.id), "role": role})
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        "role": role,
    }


def decode_token(token: str) -> Optional[TokenData]:
    """Decode a bearer token, returning None when it is invalid"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role not in (ADMIN_ROLE, CITIZEN_ROLE):
        return None
    return TokenData(subject=subject, role=role)


async def load_account(token_data: TokenData) -> Optional[Union[Admin, Citizen]]:
    """Fetch the active account a token refers to"""
    object_id = parse_object_id(token_data.subject)
    if object_id is None:
        return None

    model = Admin if token_data.role == ADMIN_ROLE else Citizen
    account = await model.get(object_id)
    if account is None or not account.is_active:
        return None
    return account


async def get_current_actor(token: str = Depends(oauth2_scheme)) -> Union[Admin, Citizen]:
    """Get current authenticated admin or citizen"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = decode_token(token)
    if token_data is None:
        raise credentials_exception

    account = await load_account(token_data)
    if account is None:
        raise credentials_exception

    return account


async def require_admin(actor: Union[Admin, Citizen] = Depends(get_current_actor)) -> Admin:
    """Allow only administrators through"""
    if not isinstance(actor, Admin):
        raise Forbidden("Access denied. Admin privileges required.")
    return actor


async def get_optional_citizen(token: Optional[str] = Depends(optional_oauth2_scheme)) -> Optional[Citizen]:
    """Resolve the calling citizen if a valid citizen token was sent"""
    if not token:
        return None

    token_data = decode_token(token)
    if token_data is None or token_data.role != CITIZEN_ROLE:
        return None

    return await load_account(token_data)


async def _authenticate(model, form_data: OAuth2PasswordRequestForm):
    account = await model.find_one({"email": form_data.username})

    if not account or not verify_password(form_data.password, account.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    return account


@router.post("/admin/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register_admin(
    request: AdminRegister,
    current_admin: Admin = Depends(require_admin)
):
    """
    Register a new administrator (existing admins only)
    """
    if await Admin.find_one({"email": request.email}):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    admin = Admin(
        name=request.name,
        email=request.email,
        password_hash=get_password_hash(request.password),
    )
    await admin.insert()

    return issue_token(admin, ADMIN_ROLE)


@router.post("/admin/login", response_model=Token)
async def login_admin(form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Admin login with email and password
    """
    admin = await _authenticate(Admin, form_data)
    return issue_token(admin, ADMIN_ROLE)


@router.post("/citizen/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register_citizen(request: CitizenRegister):
    """
    Register a new citizen
    """
    if await Citizen.find_one({"email": request.email}):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    citizen = Citizen(
        full_name=request.full_name,
        email=request.email,
        phone=request.phone,
        password_hash=get_password_hash(request.password),
    )
    await citizen.insert()

    return issue_token(citizen, CITIZEN_ROLE)


@router.post("/citizen/login", response_model=Token)
async def login_citizen(form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Citizen login with email and password
    """
    citizen = await _authenticate(Citizen, form_data)
    return issue_token(citizen, CITIZEN_ROLE)


@router.get("/me")
async def get_current_user(actor: Union[Admin, Citizen] = Depends(get_current_actor)):
    """
    Get current authenticated account details
    """
    if isinstance(actor, Admin):
        return {"id": str(actor.id), "name": actor.name, "email": actor.email, "role": ADMIN_ROLE}

    return {"id": str(actor.id), "name": actor.full_name, "email": actor.email, "role": CITIZEN_ROLE}
