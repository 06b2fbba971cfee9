from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ticketing.database import get_db
from ticketing.logging_config import logger
from ticketing.fares.schemas import TicketTypeRequest, TicketTypeResponse, DestinationsResponse
from ticketing.fares.service import TicketTypeService, RouteNotFoundError
from ticketing.schedules.schemas import city_info

router = APIRouter()

@router.post("/ticket-types/by-route", response_model=TicketTypeResponse)
def get_ticket_types_by_route(
    request: TicketTypeRequest,
    db: Session = Depends(get_db)
):
    """Get priced ticket types of a route, optionally for one pickup/dropoff pair"""
    
    service = TicketTypeService(db)
    try:
        data = service.ticket_types_for_route(
            request.route_id,
            pickup_city_id=request.pickup_point,
            dropoff_city_id=request.dropoff_point,
            on_date=request.travel_date
        )
    except RouteNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except SQLAlchemyError:
        logger.exception(f"Ticket type lookup failed for route {request.route_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )
    
    return TicketTypeResponse(
        message="Ticket types retrieved successfully",
        data=data
    )

@router.get("/cities/{city_id}/destinations", response_model=DestinationsResponse)
def get_destinations(
    city_id: int,
    db: Session = Depends(get_db)
):
    """Get cities reachable with a priced ticket from the given city"""
    
    service = TicketTypeService(db)
    try:
        cities = service.destinations_from(city_id)
    except SQLAlchemyError:
        logger.exception(f"Destination lookup failed for city {city_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )
    
    message = "Bus stops retrieved successfully." if cities else "No destinations available from this city."
    return DestinationsResponse(
        message=message,
        cities=[city_info(city) for city in cities]
    )
