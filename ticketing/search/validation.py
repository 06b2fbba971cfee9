from typing import List, Optional
from datetime import date
from sqlalchemy.orm import Session

from ticketing.models import City
from ticketing.search.schemas import BusSearchRequest, SearchValidationError

class SearchValidator:
    """Service for validating bus search requests"""
    
    def __init__(self, db: Session, today: Optional[date] = None):
        self.db = db
        self.today = today or date.today()
    
    def _validate_city(self, city_id: int, field: str, label: str) -> Optional[SearchValidationError]:
        city = self.db.query(City).filter(City.id == city_id).first()
        if not city or city.is_deleted:
            return SearchValidationError(
                error_code=f"INVALID_{field.upper()}",
                error_message=f"{label} city with ID {city_id} not found",
                field=field
            )
        return None
    
    def validate_search_request(self, request: BusSearchRequest) -> List[SearchValidationError]:
        """Validate a bus search request"""
        errors = []
        
        if request.pickup_point == request.dropoff_point:
            errors.append(SearchValidationError(
                error_code="SAME_CITY",
                error_message="Pickup and dropoff points cannot be the same",
                field="dropoff_point"
            ))
        
        for city_id, field, label in (
            (request.pickup_point, "pickup_point", "Pickup"),
            (request.dropoff_point, "dropoff_point", "Dropoff")
        ):
            error = self._validate_city(city_id, field, label)
            if error:
                errors.append(error)
        
        if request.travel_date < self.today:
            errors.append(SearchValidationError(
                error_code="PAST_TRAVEL_DATE",
                error_message="Travel date cannot be in the past",
                field="travel_date"
            ))
        
        if request.return_date and request.return_date < request.travel_date:
            errors.append(SearchValidationError(
                error_code="INVALID_RETURN_DATE",
                error_message="Return date cannot be before the travel date",
                field="return_date"
            ))
        
        return errors
