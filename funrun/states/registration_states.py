from aiogram.fsm.state import State, StatesGroup


class RegistrationStates(StatesGroup):
    """FSM for the five-step registration form."""
    email       = State()   # Step 1: email + registering for
    participant = State()   # Step 2: participant info
    health      = State()   # Step 3: health questionnaire
    race_pack   = State()   # Step 4: jersey size
    category    = State()   # Step 5: category + summary
    enter_value = State()   # Waiting for a typed answer (field kept in data)


# Step number → screen state
STEP_STATES = (
    RegistrationStates.email,
    RegistrationStates.participant,
    RegistrationStates.health,
    RegistrationStates.race_pack,
    RegistrationStates.category,
)


def state_for_step(step: int) -> State:
    return STEP_STATES[step - 1]
