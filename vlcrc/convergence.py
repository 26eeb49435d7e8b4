'''
Copyright (c) 2020 Modul 9/HiFiBerry

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
'''

'''
Polling until a setter shows its effect.

VLC applies some commands asynchronously, so reading the state directly
after changing it can return the old value. converge() re-issues the command
until the getter reports the expected value or the retry budget runs out.
'''

import logging
import operator
import time

from vlcrc.errors import VLCConvergenceError


class RetryPolicy:
    """
    Attempt cap and backoff for converge()

    attempts:  maximum number of times the setter is issued
    delay:     pause after the first mismatch (seconds)
    backoff:   factor applied to the pause after each mismatch
    max_delay: upper limit for a single pause
    deadline:  optional overall limit in seconds, None for no limit
    """

    def __init__(self, attempts=20, delay=0.05, backoff=1.5, max_delay=0.5, deadline=None):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        if delay < 0 or max_delay < 0:
            raise ValueError("delays can't be negative")
        if backoff < 1:
            raise ValueError("backoff must be at least 1")

        self.attempts = attempts
        self.delay = delay
        self.backoff = backoff
        self.max_delay = max_delay
        self.deadline = deadline

    def delays(self):
        """
        Pauses between attempts, one less than the number of attempts
        """
        delay = self.delay
        for _i in range(self.attempts - 1):
            yield min(delay, self.max_delay)
            delay = delay * self.backoff

    def expired(self, started, now=None):
        if self.deadline is None:
            return False
        if now is None:
            now = time.monotonic()
        return now - started >= self.deadline

    def __eq__(self, other):
        if not isinstance(other, RetryPolicy):
            return False

        return self.__dict__ == other.__dict__

    def __repr__(self):
        return "RetryPolicy(attempts={}, delay={}, backoff={}, max_delay={}, deadline={})".format(
            self.attempts, self.delay, self.backoff, self.max_delay, self.deadline)


def converge(apply, observe, expected, policy=None, matches=None, name=None, sleep=time.sleep):
    """
    Issue apply() and check observe() until it matches the expected value.

    Returns the observed value that matched. Raises VLCConvergenceError if
    the policy is exhausted. Errors raised by apply() or observe() are not
    retried.
    """
    if policy is None:
        policy = RetryPolicy()
    if matches is None:
        matches = operator.eq
    if name is None:
        name = getattr(apply, "__name__", "command")

    started = time.monotonic()
    delays = policy.delays()
    attempts = 0
    observed = None

    while True:
        attempts += 1
        apply()
        observed = observe()
        if matches(observed, expected):
            logging.debug("%s converged to %s after %s attempt(s)", name, observed, attempts)
            return observed

        delay = next(delays, None)
        if delay is None or policy.expired(started):
            break

        logging.debug("%s: got %s, expected %s, retrying in %ss", name, observed, expected, delay)
        sleep(delay)

    logging.warning("%s: giving up after %s attempts, got %s instead of %s",
                    name, attempts, observed, expected)
    raise VLCConvergenceError(name, expected, observed, attempts)
