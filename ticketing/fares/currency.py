from typing import Dict, Optional, Tuple
from decimal import Decimal
from sqlalchemy.orm import Session

from ticketing.config import settings
from ticketing.logging_config import logger
from ticketing.models import City, CurrencyExchangeRate

NO_CONVERSION = Decimal("1")

class CurrencyResolver:
    """Looks up exchange rates for ordered currency pairs"""
    
    def __init__(self, db: Session):
        self.db = db
        self._rate_cache: Dict[Tuple[str, str], Decimal] = {}
    
    def rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Return the stored rate for the pair, or 1 when none is stored"""
        key = (from_currency, to_currency)
        if key in self._rate_cache:
            return self._rate_cache[key]
        
        record = self.db.query(CurrencyExchangeRate).filter(
            CurrencyExchangeRate.from_currency == from_currency,
            CurrencyExchangeRate.to_currency == to_currency
        ).order_by(CurrencyExchangeRate.id.desc()).first()
        
        if record and record.rate:
            rate = Decimal(str(record.rate))
        else:
            logger.warning(f"Exchange rate not found for {from_currency}->{to_currency}, using 1")
            rate = NO_CONVERSION
        
        self._rate_cache[key] = rate
        return rate
    
    def rate_for_city(self, city: Optional[City]) -> Decimal:
        """Exchange rate to apply to fares departing from the given city"""
        if city is None or not city.from_ukraine:
            return NO_CONVERSION
        return self.rate(settings.BASE_CURRENCY, settings.LOCAL_CURRENCY)
