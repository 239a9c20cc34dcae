"""
PayPal Orders v2 client.

Every operation takes an access token; ``get_access_token`` performs the
client-credentials grant and callers fetch a fresh token per request, nothing
is cached between requests.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from .exceptions import PaymentProcessorError

logger = logging.getLogger(__name__)


class PayPalClient:
    """Thin wrapper over the PayPal REST API."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        api_base: str,
        currency: str = 'EUR',
        brand_name: str = '',
        locale: str = 'fr-FR',
        return_url: str = '',
        cancel_url: str = '',
        timeout: float = 10,
        session: Optional[requests.Session] = None
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.api_base = api_base.rstrip('/')
        self.currency = currency
        self.brand_name = brand_name
        self.locale = locale
        self.return_url = return_url
        self.cancel_url = cancel_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls):
        config = settings.PAYPAL
        return cls(
            client_id=config['CLIENT_ID'],
            client_secret=config['CLIENT_SECRET'],
            api_base=config['API_BASE'],
            currency=config['CURRENCY'],
            brand_name=config['BRAND_NAME'],
            locale=config['LOCALE'],
            return_url=config['RETURN_URL'],
            cancel_url=config['CANCEL_URL'],
            timeout=config['TIMEOUT'],
        )

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.api_base}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("PayPal %s %s failed: %s", method, path, e)
            raise PaymentProcessorError(f"Payment processor request failed: {e}")
        except ValueError:
            logger.warning("PayPal %s %s returned non-JSON", method, path)
            raise PaymentProcessorError("Payment processor returned a malformed response")

        if not isinstance(data, dict):
            raise PaymentProcessorError("Payment processor returned a malformed response")
        return data

    @staticmethod
    def _require(data: Dict[str, Any], *keys: str) -> None:
        missing = [key for key in keys if not data.get(key)]
        if missing:
            raise PaymentProcessorError(
                f"Payment processor response missing {', '.join(missing)}"
            )

    def _bearer(self, access_token: str) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {access_token}',
            'Content-Type': 'application/json',
        }

    def get_access_token(self) -> str:
        """Client-credentials grant."""
        data = self._request(
            'POST',
            '/v1/oauth2/token',
            data={'grant_type': 'client_credentials'},
            auth=(self.client_id, self.client_secret),
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
        )
        self._require(data, 'access_token')
        return data['access_token']

    def create_order(self, access_token: str, *, total: Decimal, reference_id: str) -> Dict[str, Any]:
        """
        Create a CAPTURE-intent order the user approves in the PayPal checkout.

        Returns:
            Processor order descriptor with ``id``, ``status`` and ``links``
        """
        body = {
            'intent': 'CAPTURE',
            'purchase_units': [{
                'reference_id': reference_id,
                'amount': {
                    'currency_code': self.currency,
                    'value': f'{total:.2f}',
                },
            }],
            'payment_source': {
                'paypal': {
                    'experience_context': {
                        'payment_method_preference': 'IMMEDIATE_PAYMENT_REQUIRED',
                        'payment_method_selected': 'PAYPAL',
                        'brand_name': self.brand_name,
                        'locale': self.locale,
                        'landing_page': 'LOGIN',
                        'shipping_preference': 'GET_FROM_FILE',
                        'user_action': 'PAY_NOW',
                        'return_url': self.return_url,
                        'cancel_url': self.cancel_url,
                    },
                },
            },
        }
        data = self._request('POST', '/v2/checkout/orders', json=body, headers=self._bearer(access_token))
        self._require(data, 'id', 'status')
        return data

    def capture_order(self, access_token: str, order_id: str) -> Dict[str, Any]:
        data = self._request(
            'POST',
            f'/v2/checkout/orders/{order_id}/capture',
            json={},
            headers=self._bearer(access_token),
        )
        self._require(data, 'status')
        return data

    def get_order(self, access_token: str, order_id: str) -> Dict[str, Any]:
        return self._request(
            'GET',
            f'/v2/checkout/orders/{order_id}',
            headers=self._bearer(access_token),
        )
