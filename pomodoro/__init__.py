"""Terminal Pomodoro timer: work/break phase state machine and tick-driven runner."""
