from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List

from ticketing.database import get_db
from ticketing.logging_config import logger
from ticketing.search.schemas import (
    BusSearchRequest, BusSearchResponse, UpcomingSearchRequest, UpcomingSearchResponse,
    SearchValidationError
)
from ticketing.search.service import FareSearchService
from ticketing.search.validation import SearchValidator

router = APIRouter()

def _raise_validation_errors(errors: List[SearchValidationError]):
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "message": "Bus search request validation failed",
            "errors": [
                {
                    "code": error.error_code,
                    "message": error.error_message,
                    "field": error.field
                }
                for error in errors
            ]
        }
    )

@router.post("", response_model=BusSearchResponse)
def bus_search(
    request: BusSearchRequest,
    db: Session = Depends(get_db)
):
    """Search onward (and optionally return) buses between two cities"""
    
    validator = SearchValidator(db)
    validation_errors = validator.validate_search_request(request)
    if validation_errors:
        _raise_validation_errors(validation_errors)
    
    try:
        result = FareSearchService(db).search(
            request.pickup_point,
            request.dropoff_point,
            request.travel_date,
            request.return_date
        )
    except SQLAlchemyError:
        logger.exception("Error in bus_search")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )
    
    if not result.onward and not result.return_:
        message = "No buses available for the selected date."
    else:
        message = "Buses found successfully."
    
    return BusSearchResponse(
        message=message,
        onward=result.onward,
        return_=result.return_
    )

@router.post("/upcoming", response_model=UpcomingSearchResponse)
def bus_search_upcoming(
    request: UpcomingSearchRequest,
    db: Session = Depends(get_db)
):
    """Search buses on the travel date and the following days"""
    
    validator = SearchValidator(db)
    validation_errors = validator.validate_search_request(BusSearchRequest(
        pickup_point=request.pickup_point,
        dropoff_point=request.dropoff_point,
        travel_date=request.travel_date
    ))
    if validation_errors:
        _raise_validation_errors(validation_errors)
    
    try:
        buses = FareSearchService(db).search_upcoming(
            request.pickup_point,
            request.dropoff_point,
            request.travel_date,
            days=request.days,
            limit=request.limit
        )
    except SQLAlchemyError:
        logger.exception("Error in bus_search_upcoming")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )
    
    if buses:
        message = "Buses found successfully."
    else:
        message = "No buses available for the selected date or upcoming days."
    
    return UpcomingSearchResponse(message=message, buses=buses)
