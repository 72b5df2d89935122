"""Basic usage example for affirm."""

import math
import re
from datetime import datetime, timedelta

from affirm import AbortTest, ConsoleReporter, Message, wrap
from affirm import assertions as check


def main():
    """Run a handful of checks against a console reporter."""

    reporter = ConsoleReporter()

    # Direct-call style: reporter first, expected before actual
    check.equal(reporter, 123, 123, msg="123 and 123 should be equal")
    check.contains(reporter, ["Foo", "Bar"], "Baz", msg=Message("looking for %s", "Baz"))
    check.in_epsilon(reporter, 100, 101, 0.01)

    # Fluent style: bind the actual value once
    expect = wrap(reporter)
    expect(22 / 7.0).in_delta(math.pi, 0.01)
    expect("it's starting").regexp(re.compile("start"))
    expect(datetime.now()).within_duration(datetime.now(), timedelta(seconds=1))
    expect(lambda: int("not a number")).raises()

    # Must mode stops at the first failure
    try:
        expect({"status": "down"}).must.equal({"status": "up"})
        print("never printed")
    except AbortTest:
        pass

    print(f"{reporter.failures} failure(s) recorded")


if __name__ == "__main__":
    main()
