from typing import List

from pydantic import BaseModel


class MenuItem(BaseModel):
    label: str
    locked: bool = False


class MenuGroup(BaseModel):
    title: str
    items: List[MenuItem]


class MenuSection(BaseModel):
    key: str
    label: str
    groups: List[MenuGroup]
    report_label: str


class MenuResponse(BaseModel):
    sections: List[MenuSection]
