from blockfall.input import RawInput, RepeatedAction, RepeatState, SmartInput


def test_repeated_action_fire_ticks_while_held():
    action = RepeatedAction(wait_duration=30, repeat_duration=5)
    fired = []
    for tick in range(100):
        action.tick(True)
        if action.active:
            fired.append(tick)
    assert fired == [0, 30] + list(range(35, 100, 5))
    assert action.state is RepeatState.REPEAT


def test_release_returns_to_inactive_and_next_press_fires():
    action = RepeatedAction()
    for _ in range(40):
        action.tick(True)
    action.tick(False)
    assert action.state is RepeatState.INACTIVE
    assert not action.active
    action.tick(True)
    assert action.active
    assert action.state is RepeatState.WAIT


def test_tapping_fires_on_every_press():
    action = RepeatedAction()
    fired = 0
    for tick in range(10):
        action.tick(tick % 2 == 0)
        fired += action.active
    assert fired == 5


def test_smart_input_debounces_moves_but_not_drops():
    smart = SmartInput()
    held = RawInput(move_left=True, rotate=True, fast_drop=True, instant_drop=True)
    smart.tick(held)
    assert smart.move_left and smart.rotate and not smart.move_right
    smart.tick(held)
    assert not smart.move_left
    assert not smart.rotate
    assert smart.fast_drop
    assert smart.instant_drop
    smart.tick(RawInput())
    assert not smart.fast_drop
    assert not smart.instant_drop


def test_smart_input_custom_durations():
    smart = SmartInput(wait_duration=2, repeat_duration=1)
    fired = []
    for tick in range(5):
        smart.tick(RawInput(move_right=True))
        if smart.move_right:
            fired.append(tick)
    assert fired == [0, 2, 3, 4]
