"""Forms validating timeline requests.

Every request carries the client's current `time` parameter so the server can
rebuild the timeline state without storing anything per user.
"""

from __future__ import annotations

from django import forms

from timeline.controller import DragHandle


class TimelineForm(forms.Form):
    """Base form carrying the current timeline state."""

    time = forms.CharField(
        required=False,
        strip=True,
        help_text="Current `time` parameter, e.g. `2000..2005` or `earliest..latest`.",
    )
    single_point = forms.BooleanField(
        required=False,
        help_text="Play and drag a single point instead of extending a range.",
    )

    def query_params(self) -> dict[str, str]:
        """Return query parameters for building a ChartTimeline."""

        return {"time": self.cleaned_data.get("time") or ""}


class TimelineDragForm(TimelineForm):
    """Validate one pointer drag on the timeline slider."""

    handle = forms.ChoiceField(
        required=False,
        choices=[("", "Auto")] + [(handle.value, handle.value.title()) for handle in DragHandle],
        help_text="Handle being dragged; chosen from the pointer position when empty.",
    )
    input_time = forms.FloatField(required=False, help_text="Pointer position in time units.")
    fraction = forms.FloatField(required=False, help_text="Pointer position as a fraction of the slider width.")
    grab_time = forms.FloatField(required=False, help_text="Where the pointer went down.")
    grab_bounds = forms.CharField(
        required=False,
        strip=True,
        help_text="`time` parameter when the pointer went down; anchors panning across requests.",
    )
    start_marker = forms.BooleanField(required=False)
    end_marker = forms.BooleanField(required=False)
    is_playing = forms.BooleanField(required=False)
    release = forms.BooleanField(required=False, help_text="Pointer released; snap adjacent handles.")

    def clean(self) -> dict[str, object]:
        """Require exactly one pointer position."""

        cleaned = super().clean()
        has_input_time = cleaned.get("input_time") is not None
        has_fraction = cleaned.get("fraction") is not None
        if has_input_time == has_fraction and not self.errors:
            raise forms.ValidationError("Provide exactly one of input_time or fraction.")
        return cleaned


class TimelinePlayForm(TimelineForm):
    """Validate a playback request."""

    ticks = forms.IntegerField(required=False, min_value=1, help_text="Optional tick budget.")


class TimelineResetForm(TimelineForm):
    """Validate a reset of one bound to its unbounded sentinel."""

    bound = forms.ChoiceField(choices=(("start", "Start"), ("end", "End")))
