from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from sqlalchemy.orm import Session
from storefront.api.deps import current_role
from storefront.db import get_db
from storefront.schemas.product_schema import CategoryIn, ProductIn, ProductOut
from storefront.services.catalog_service import CatalogService
from storefront.services.exceptions import NotFoundError, ValidationError

router = APIRouter(tags=["catalogue"])
categories_router = APIRouter(tags=["categories"])

@router.get("", summary="List products")
def list_products(
    q: Optional[str] = Query(None, description="search term, matched against name and category"),
    db: Session = Depends(get_db),
):
    svc = CatalogService(db)
    items = svc.list_products(q=q)
    return {
        "items": [CatalogService.to_dict(p) for p in items],
        "total": len(items),
    }

@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        p = svc.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ProductOut.model_validate(p).model_dump()

@router.post("", summary="Add product", dependencies=[Depends(current_role)])
def add_product(payload: ProductIn, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        p = svc.add_product(payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CatalogService.to_dict(p)

@router.put("/{product_id}", summary="Replace product", dependencies=[Depends(current_role)])
def update_product(product_id: str, payload: ProductIn, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        p = svc.update_product(product_id, payload.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CatalogService.to_dict(p)


@categories_router.get("", summary="List categories")
def list_categories(q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return {"items": CatalogService(db).list_categories(q=q)}

@categories_router.post("", summary="Add category", dependencies=[Depends(current_role)])
def add_category(payload: CategoryIn, db: Session = Depends(get_db)):
    try:
        return {"items": CatalogService(db).add_category(payload.name)}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

@categories_router.delete("/{name}", summary="Delete category", dependencies=[Depends(current_role)])
def delete_category(name: str, db: Session = Depends(get_db)):
    try:
        return {"items": CatalogService(db).delete_category(name)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
