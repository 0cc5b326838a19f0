"""User API router with CRUD operations."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.app.api.http.deps import get_user_service
from src.app.core.services import UserService
from src.app.entities.core.user import User, UserCreate, UserUpdate

router = APIRouter()


@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> User:
    """Create a new user."""
    return service.create_user(user.model_dump())


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> User:
    """Get a user by ID."""
    user = service.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}")
def update_user(
    user_id: int,
    user_update: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> dict[str, str]:
    """Update a user."""
    if not service.update_user(user_id, user_update.model_dump(exclude_unset=True)):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User updated successfully"}


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user."""
    if not service.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/", response_model=list[User])
def list_users(
    service: UserService = Depends(get_user_service),
) -> list[User]:
    """List all users."""
    return list(service.get_all_users())
