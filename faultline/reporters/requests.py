"""
faultline.reporters.requests
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging

import requests

import faultline
from faultline.exceptions import APIError, UnexpectedResponse
from faultline.reporters.base import Reporter
from faultline.utils.json import jsonify_notice

logger = logging.getLogger('faultline.errors')


class RequestsReporter(Reporter):
    """
    Sends each notice to ``<endpoint>/projects/<project>/errors`` with a
    blocking HTTP POST.
    """

    def __init__(self, verify_ssl=True, ca_certs=None, session=None):
        self.verify_ssl = verify_ssl
        self.ca_certs = ca_certs
        self._session = session

    @property
    def session(self):
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def get_url(self, options):
        return '%s/projects/%s/errors' % (options.endpoint.rstrip('/'),
                                          options.project)

    def get_headers(self, options):
        return {
            'User-Agent': 'faultline-python/%s' % (faultline.VERSION,),
            'Content-Type': 'application/json',
            'X-Api-Key': options.api_key,
        }

    def report(self, notice, options, future):
        self.check_options(options)
        self.send(notice, options, future)

    def send(self, notice, options, future):
        url = self.get_url(options)
        if self.verify_ssl and self.ca_certs:
            # If SSL verification is enabled use the provided CA bundle to
            # perform the verification.
            verify = self.ca_certs
        else:
            verify = self.verify_ssl

        logger.debug('Sending notice to %s', url)
        try:
            response = self.session.post(
                url,
                data=jsonify_notice(notice),
                headers=self.get_headers(options),
                timeout=options.timeout / 1000.0,
                verify=verify,
            )
        except requests.RequestException as e:
            future.set_exception(e)
            return

        self.handle_response(notice, response, future)

    def handle_response(self, notice, response, future):
        status = response.status_code
        if 200 <= status < 500:
            try:
                data = response.json()
            except ValueError:
                data = None

            if isinstance(data, dict):
                if data.get('id'):
                    notice.id = data['id']
                    future.set_result(notice)
                    return
                if data.get('error'):
                    future.set_exception(APIError(data['error'], code=status))
                    return

        future.set_exception(UnexpectedResponse(status, response.text.strip()))
