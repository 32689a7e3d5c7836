from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.common import dump, success
from storefront.schemas.user_schema import ProfileUpdate, UserOut
from storefront.security import get_current_user, require_admin
from storefront.services.user_service import UserService

profile_router = APIRouter(prefix="/api/profile", tags=["profile"])
users_router = APIRouter(prefix="/api/users", tags=["users"])


@profile_router.get("", summary="Get own profile")
def get_profile(user: User = Depends(get_current_user)):
    return success({"user": dump(UserOut.model_validate(user))})


@profile_router.put("", summary="Update own profile")
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = UserService(db).update_profile(user, name=payload.name, email=payload.email)
    return success({"user": dump(UserOut.model_validate(user))})


@profile_router.delete("", summary="Delete own account (soft)", status_code=204)
def delete_account(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    UserService(db).delete_account(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@users_router.get("", summary="List users (admin)")
def list_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    data = [dump(UserOut.model_validate(u)) for u in UserService(db).list_users()]
    return success({"users": data}, results=len(data))


@users_router.delete("/{user_id}", summary="Delete user (admin, soft)", status_code=204)
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserService(db).delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
