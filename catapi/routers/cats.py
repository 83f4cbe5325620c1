from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from catapi.core.config import Settings
from catapi.core.errors import BadRequestError
from catapi.db.models import User
from catapi.domain.geo import parse_corner
from catapi.domain.images import discard_image, store_image
from catapi.routers.deps import current_user, get_cat_service, get_settings_dep
from catapi.schemas import CatAdminModify, CatCreate, CatModify, Coordinates, parse_input
from catapi.services.cat_service import CatService

router = APIRouter(prefix="/cats", tags=["cats"])


def _location_from_form(lat: Optional[str], lng: Optional[str]) -> Optional[dict]:
    if not lat and not lng:
        return None
    if not lat or not lng:
        raise BadRequestError("Both lat and lng are required: location")
    return {"type": "Point", "coordinates": [lng, lat]}


@router.get("")
def cat_list(cats: CatService = Depends(get_cat_service)):
    return cats.list_cats()


@router.get("/area")
def cat_list_by_area(
    top_right: str = Query(..., alias="topRight"),
    bottom_left: str = Query(..., alias="bottomLeft"),
    cats: CatService = Depends(get_cat_service),
):
    try:
        tr = parse_input(Coordinates, parse_corner(top_right))
        bl = parse_input(Coordinates, parse_corner(bottom_left))
    except ValueError as exc:
        raise BadRequestError(str(exc)) from exc
    return cats.cats_by_area(tr.model_dump(), bl.model_dump())


@router.get("/user")
def cat_list_by_user(user: User = Depends(current_user), cats: CatService = Depends(get_cat_service)):
    return cats.cats_by_owner(user.id)


@router.get("/{cat_id}")
def cat_get(cat_id: str, cats: CatService = Depends(get_cat_service)):
    return cats.get_cat(cat_id)


@router.post("")
def cat_create(
    cat_name: str = Form(""),
    weight: str = Form(""),
    birthdate: str = Form(""),
    lat: Optional[str] = Form(None),
    lng: Optional[str] = Form(None),
    cat: UploadFile = File(...),
    user: User = Depends(current_user),
    cats: CatService = Depends(get_cat_service),
    settings: Settings = Depends(get_settings_dep),
):
    data = parse_input(
        CatCreate,
        {
            "cat_name": cat_name,
            "weight": weight,
            "birthdate": birthdate,
            "location": _location_from_form(lat, lng),
        },
    )
    stored = store_image(cat.file, cat.filename or "", settings.uploads_dir)
    try:
        created = cats.create_cat(user, data, filename=stored.filename, gps=stored.gps)
    except Exception:
        discard_image(stored)
        raise
    return {"message": "Cat created", "data": created}


@router.put("/admin/{cat_id}")
def cat_update_admin(
    cat_id: str,
    payload: CatAdminModify,
    user: User = Depends(current_user),
    cats: CatService = Depends(get_cat_service),
):
    return {"message": "Cat updated", "data": cats.update_as_admin(user, cat_id, payload)}


@router.delete("/admin/{cat_id}")
def cat_delete_admin(cat_id: str, user: User = Depends(current_user), cats: CatService = Depends(get_cat_service)):
    return {"message": "Cat deleted", "data": cats.delete_as_admin(user, cat_id)}


@router.put("/{cat_id}")
def cat_update(
    cat_id: str,
    payload: CatModify,
    user: User = Depends(current_user),
    cats: CatService = Depends(get_cat_service),
):
    return {"message": "Cat updated", "data": cats.update_cat(user, cat_id, payload)}


@router.delete("/{cat_id}")
def cat_delete(cat_id: str, user: User = Depends(current_user), cats: CatService = Depends(get_cat_service)):
    return {"message": "Cat deleted", "data": cats.delete_cat(user, cat_id)}
