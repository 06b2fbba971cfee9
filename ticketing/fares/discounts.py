from typing import Dict, Optional, Tuple
from datetime import date
from sqlalchemy.orm import Session

from ticketing.logging_config import logger
from ticketing.models import RouteDiscount

class DiscountResolver:
    """Finds the discount in force for a route on a date"""
    
    def __init__(self, db: Session):
        self.db = db
        self._discount_cache: Dict[Tuple[int, date], Optional[RouteDiscount]] = {}
    
    def active_discount(self, route_id: int, on_date: date) -> Optional[RouteDiscount]:
        """Latest non-deleted discount whose inclusive date range contains on_date"""
        key = (route_id, on_date)
        if key in self._discount_cache:
            return self._discount_cache[key]
        
        # Overlapping discounts: the most recently created (highest id) wins
        discount = self.db.query(RouteDiscount).filter(
            RouteDiscount.route_id == route_id,
            RouteDiscount.from_date <= on_date,
            RouteDiscount.to_date >= on_date,
            RouteDiscount.is_deleted == False
        ).order_by(RouteDiscount.id.desc()).first()
        
        if discount:
            logger.debug(
                f"Route {route_id} discount {discount.id} active on {on_date}: "
                f"{discount.discount_type} {discount.discount_value}"
            )
        
        self._discount_cache[key] = discount
        return discount
