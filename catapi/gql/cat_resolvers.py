"""Query and mutation resolvers for cats.

Service calls hit the database, so they run in the threadpool.
"""
from __future__ import annotations

from ariadne import MutationType, QueryType
from starlette.concurrency import run_in_threadpool

from catapi.schemas import CatAdminModify, CatCreate, CatModify, Coordinates, parse_input

query = QueryType()
mutation = MutationType()


def _cats(info):
    return info.context["cat_service"]


def _caller(info):
    return info.context.get("user")


@query.field("cats")
async def resolve_cats(_obj, info):
    return await run_in_threadpool(_cats(info).list_cats)


@query.field("catById")
async def resolve_cat_by_id(_obj, info, id):
    return await run_in_threadpool(_cats(info).get_cat, id)


@query.field("catsByOwner")
async def resolve_cats_by_owner(_obj, info, ownerId):
    return await run_in_threadpool(_cats(info).cats_by_owner, ownerId)


@query.field("catsByArea")
async def resolve_cats_by_area(_obj, info, topRight, bottomLeft):
    top_right = parse_input(Coordinates, topRight)
    bottom_left = parse_input(Coordinates, bottomLeft)
    return await run_in_threadpool(_cats(info).cats_by_area, top_right.model_dump(), bottom_left.model_dump())


@mutation.field("createCat")
async def resolve_create_cat(_obj, info, **args):
    data = parse_input(CatCreate, args)
    return await run_in_threadpool(_cats(info).create_cat, _caller(info), data)


@mutation.field("updateCat")
async def resolve_update_cat(_obj, info, id, **args):
    data = parse_input(CatModify, args)
    return await run_in_threadpool(_cats(info).update_cat, _caller(info), id, data)


@mutation.field("deleteCat")
async def resolve_delete_cat(_obj, info, id):
    return await run_in_threadpool(_cats(info).delete_cat, _caller(info), id)


@mutation.field("updateCatAsAdmin")
async def resolve_update_cat_as_admin(_obj, info, id, **args):
    data = parse_input(CatAdminModify, args)
    return await run_in_threadpool(_cats(info).update_as_admin, _caller(info), id, data)


@mutation.field("deleteCatAsAdmin")
async def resolve_delete_cat_as_admin(_obj, info, id):
    return await run_in_threadpool(_cats(info).delete_as_admin, _caller(info), id)
