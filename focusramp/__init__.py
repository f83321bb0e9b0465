"""Focus Ramp: training schedule generation and Pomodoro session timing."""
