from typing import Annotated, cast

from fastapi import Depends, Request

from speckeep.services import SpecServices


def get_services(request: Request) -> SpecServices:
    return cast("SpecServices", request.app.state.services)


Services = Annotated[SpecServices, Depends(get_services)]
