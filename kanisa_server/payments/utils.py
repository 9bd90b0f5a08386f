def _plural(count, unit):
    return f"{count} {unit}{'s' if count > 1 else ''}"


def minutes_to_cron_expression(minutes):
    """
    Convert a sweep interval in minutes into a five-field crontab expression.

    Returns {'expression': ..., 'description': ...}. Intervals under an hour
    step the minute field, under a day step the hour field, and anything
    longer steps the day-of-month field at a fixed time of day.
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
        raise ValueError('Minutes must be a positive integer')

    if minutes < 60:
        return {
            'expression': f'*/{minutes} * * * *',
            'description': f'every {_plural(minutes, "minute")}',
        }

    if minutes < 1440:
        hours, remaining_minutes = divmod(minutes, 60)
        if remaining_minutes == 0:
            return {
                'expression': f'0 */{hours} * * *',
                'description': f'every {_plural(hours, "hour")}',
            }
        return {
            'expression': f'{remaining_minutes} */{hours} * * *',
            'description': f'every {_plural(hours, "hour")} and {_plural(remaining_minutes, "minute")}',
        }

    days = minutes // 1440
    remaining_hours = (minutes % 1440) // 60
    remaining_minutes = minutes % 60
    if remaining_hours == 0 and remaining_minutes == 0:
        return {
            'expression': f'0 0 */{days} * *',
            'description': f'every {_plural(days, "day")}',
        }
    return {
        'expression': f'{remaining_minutes} {remaining_hours} */{days} * *',
        'description': f'every {_plural(days, "day")} at {remaining_hours:02d}:{remaining_minutes:02d}',
    }
