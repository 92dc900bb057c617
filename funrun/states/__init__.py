from funrun.states.registration_states import RegistrationStates, STEP_STATES, state_for_step

__all__ = ["RegistrationStates", "STEP_STATES", "state_for_step"]
