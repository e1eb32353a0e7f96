from sentiment.blink import BlinkDetector


def test_blink_counts_closing_transitions_only():
    b = BlinkDetector(threshold=0.2, debounce=0.1)
    b.update(0.3, now=0.0)
    b.update(0.1, now=0.5)   # closes -> blink
    b.update(0.1, now=0.6)   # still closed, no new blink
    b.update(0.3, now=0.7)   # opens
    b.update(0.1, now=1.0)   # closes again -> blink
    assert b.blink_count == 2

def test_blink_debounce():
    b = BlinkDetector(threshold=0.2, debounce=0.1)
    b.update(0.1, now=1.00)
    b.update(0.3, now=1.02)
    b.update(0.1, now=1.05)  # within 100ms of the last blink
    assert b.blink_count == 1

def test_threshold_is_exclusive_and_reset():
    b = BlinkDetector(threshold=0.2)
    b.update(0.2, now=0.0)
    assert b.blink_count == 0 and not b.eyes_closed
    b.update(0.19, now=1.0)
    assert b.blink_count == 1
    b.reset()
    assert b.blink_count == 0
