from typing import Annotated, Optional
from pydantic import BaseModel, StringConstraints

CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
CategoryDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class CreateCategoryRequest(BaseModel):
    name: CategoryName
    description: Optional[CategoryDescription] = None
