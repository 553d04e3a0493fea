import io
import typing
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from time_report.common import EmployeeSummary, ReportWriter

# Colors repeat once there are more employees than entries here.
PALETTE = [
    (66, 133, 244),
    (234, 67, 53),
    (251, 188, 5),
    (52, 168, 83),
    (171, 71, 188),
    (0, 150, 136),
    (255, 87, 34),
    (103, 58, 183),
    (205, 220, 57),
    (121, 85, 72),
]


@dataclass
class Wedge:
    summary: EmployeeSummary
    start_angle: float
    sweep_angle: float
    color: tuple[int, int, int]

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep_angle


def wedges(summaries: typing.Iterable[EmployeeSummary], start_angle: float = 0.0) -> list[Wedge]:
    """Lays out one wedge per summary, contiguously and in the given order.

    Angles are in degrees, clockwise from the 3 o'clock position, the way
    Pillow's ``pieslice`` expects them.
    """
    result = []
    angle = start_angle
    for idx, summary in enumerate(summaries):
        sweep = summary.percentage / 100 * 360
        result.append(Wedge(summary, angle, sweep, PALETTE[idx % len(PALETTE)]))
        angle += sweep
    return result


def legend_text(summary: EmployeeSummary) -> str:
    return f'{summary.label}: {summary.percentage:.2f}% ({summary.total_hours:.2f} hours)'


def load_font(size: int, bold: bool = False):
    names = ['DejaVuSans-Bold.ttf', 'arialbd.ttf'] if bold else ['DejaVuSans.ttf', 'arial.ttf']
    for name in names:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


class PieChartWriter(ReportWriter):

    filename = 'EmployeeTimePieChart.png'
    title = 'Employee Time Distribution'

    width = 800
    height = 600
    background = 'white'
    outline = (169, 169, 169)

    legend_x = 50
    legend_box_size = 20
    # Fixed-height rows below the pie; rows past the bottom edge are clipped.
    legend_line_height = 25

    def __init__(self, directory='.'):
        super().__init__(directory)
        self._pie_diameter = min(self.width, self.height) - 100
        self._pie_x = (self.width - self._pie_diameter) // 2
        self._pie_y = (self.height - self._pie_diameter) // 2 - 50

    @property
    def legend_top(self) -> int:
        return self._pie_y + self._pie_diameter + 30

    @property
    def legend_rows(self) -> int:
        """Number of legend rows that fit inside the image."""
        return (self.height - self.legend_top - self.legend_box_size) // self.legend_line_height + 1

    @property
    def pie_box(self) -> tuple[int, int, int, int]:
        return (self._pie_x, self._pie_y,
                self._pie_x + self._pie_diameter, self._pie_y + self._pie_diameter)

    def draw_pie(self, draw: ImageDraw.ImageDraw, pie: list[Wedge]):
        for wedge in pie:
            draw.pieslice(self.pie_box, wedge.start_angle, wedge.end_angle,
                          fill=wedge.color, outline=self.outline)

    def draw_title(self, draw: ImageDraw.ImageDraw):
        font = load_font(24, bold=True)
        x = (self.width - draw.textlength(self.title, font=font)) / 2
        draw.text((x, 20), self.title, fill='black', font=font)

    def draw_legend(self, draw: ImageDraw.ImageDraw, pie: list[Wedge]):
        y = self.legend_top
        draw.text((self.legend_x, y - 20), 'Legend:', fill='black', font=load_font(14, bold=True))
        font = load_font(12)
        for wedge in pie:
            box = (self.legend_x, y, self.legend_x + self.legend_box_size, y + self.legend_box_size)
            draw.rectangle(box, fill=wedge.color, outline='black')
            draw.text((self.legend_x + self.legend_box_size + 10, y), legend_text(wedge.summary),
                      fill='black', font=font)
            y += self.legend_line_height

    def draw(self, summaries: typing.Sequence[EmployeeSummary]) -> Image.Image:
        image = Image.new('RGB', (self.width, self.height), self.background)
        draw = ImageDraw.Draw(image)
        pie = wedges(summaries)
        self.draw_pie(draw, pie)
        self.draw_title(draw)
        self.draw_legend(draw, pie)
        return image

    def render(self, summaries: typing.Sequence[EmployeeSummary]) -> bytes:
        with self.draw(summaries) as image, io.BytesIO() as buffer:
            image.save(buffer, format='PNG')
            return buffer.getvalue()
