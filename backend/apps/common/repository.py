from typing import Generic, Iterable, Optional, Sequence, Type, TypeVar

from django.db import models

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Record store over a single model: find, create, update and delete by id or filter."""

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self):
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def list(self, *, order_by: Sequence[str] = (), **filters) -> Iterable[T]:
        qs = self._base_queryset().filter(**filters)
        return qs.order_by(*order_by) if order_by else qs

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save()
        return obj

    def update_where(self, filters: dict, **data) -> int:
        return self.model.objects.filter(**filters).update(**data)

    def delete(self, obj: T) -> None:
        obj.delete()

    def delete_where(self, **filters) -> int:
        deleted, _ = self.model.objects.filter(**filters).delete()
        return deleted
